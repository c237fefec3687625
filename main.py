from vaultmount import universal_factory



def main():
    # Example usage of the universal factory against a local dev server
    vault_config = {
        "address": "http://127.0.0.1:8200",
        "token": "root",
    }

    backend = universal_factory("vault_secret_backend", vault_config)
    state = backend.create(backend.planned_data(None, {
        "type": "ssh",
        "path": "ssh-test",
        "description": "test description",
        "default_lease_ttl_seconds": 3600,
        "max_lease_ttl_seconds": 86400,
    }))
    print(f"Mounted: {state}")

    backend.delete(state)
    print(f"Unmounted: {state}")

if __name__ == "__main__":
    main()
