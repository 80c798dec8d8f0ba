from enum import Enum


class Role(str, Enum):
    admin = "admin"
    normal_user = "normal_user"
    store_owner = "store_owner"


class ClaimStatus(str, Enum):
    none = "none"
    pending_verification = "pending_verification"


class Population(str, Enum):
    """Which identity table a login subject lives in."""

    users = "users"
    stores = "stores"


# Roles whose subject id refers to a row in the users table
USER_ROLES = {Role.admin, Role.normal_user}


def population_for(role: str) -> Population:
    if role in {r.value for r in USER_ROLES}:
        return Population.users
    return Population.stores
