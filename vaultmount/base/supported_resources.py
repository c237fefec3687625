from typing import Literal


existing_resources = Literal["vault_secret_backend"]
