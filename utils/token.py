import uuid

def create_access_token() -> str:
    """
    Opaque bearer token for a restaurant. It carries no claims, the
    restaurant is found by looking the token up in the store.
    """
    return str(uuid.uuid4())
