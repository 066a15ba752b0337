ROLE_ADMIN = "admin"
ROLE_PLAYER = "player"

ALLOWED_ROLES = {ROLE_ADMIN, ROLE_PLAYER}

DASHBOARD_ENDPOINTS = {
    ROLE_ADMIN: "admin.dashboard",
    ROLE_PLAYER: "player.dashboard",
}


def normalize_role(role):
    """Return the canonical role name, or None when it is not one we know."""
    if not isinstance(role, str):
        return None
    name = role.strip().lower()
    if name in ALLOWED_ROLES:
        return name
    return None
