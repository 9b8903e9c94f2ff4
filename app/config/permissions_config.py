"""
Roles and Permissions Configuration
Defines the three program roles, which roles may perform each module action,
and which target roles each role may create or delete.
Used by the route guards in app.core.dependencies and by /auth/me.
"""
from typing import Dict, List

ADMIN = "admin"
VOLUNTEER = "volunteer"
PARTICIPANT = "participant"

ROLES = {
    ADMIN: {
        "home_path": "/admin",
        "description": "Program staff with full access"
    },
    VOLUNTEER: {
        "home_path": "/volunteer",
        "description": "Runs lessons, takes attendance and validates progress"
    },
    PARTICIPANT: {
        "home_path": "/participant",
        "description": "Enrolled swimmer"
    }
}

# Target roles each caller role may provision or delete
MANAGEABLE_ROLES = {
    ADMIN: [ADMIN, VOLUNTEER, PARTICIPANT],
    VOLUNTEER: [PARTICIPANT],
    PARTICIPANT: []
}

# Module actions and the roles allowed to perform them
MODULES = {
    "users": {
        "description": "Account provisioning and profiles",
        "actions": {
            "create": [ADMIN, VOLUNTEER],
            "read": [ADMIN, VOLUNTEER],
            "update": [ADMIN, VOLUNTEER],
            "delete": [ADMIN, VOLUNTEER]
        }
    },
    "participants": {
        "description": "Participant intake records",
        "actions": {
            "read": [ADMIN, VOLUNTEER],
            "update": [ADMIN, VOLUNTEER]
        }
    },
    "sessions": {
        "description": "Lesson scheduling and attendance",
        "actions": {
            "create": [ADMIN],
            "read": [ADMIN, VOLUNTEER, PARTICIPANT],
            "update": [ADMIN],
            "delete": [ADMIN],
            "attend": [PARTICIPANT],
            "mark": [ADMIN, VOLUNTEER]
        }
    },
    "progress": {
        "description": "Levels, skills and participant progress",
        "actions": {
            "manage": [ADMIN],
            "read": [ADMIN, VOLUNTEER, PARTICIPANT],
            "award": [ADMIN, VOLUNTEER]
        }
    },
    "gear": {
        "description": "Gear inventory and assignments",
        "actions": {
            "manage": [ADMIN],
            "read": [ADMIN, VOLUNTEER],
            "assign": [ADMIN, VOLUNTEER]
        }
    }
}


def roles_for_permission(permission: str) -> List[str]:
    """Resolve "module:action" to the roles allowed to perform it. Unknown permissions allow nobody."""
    module_name, _, action = permission.partition(":")
    module_config = MODULES.get(module_name)
    if not module_config:
        return []
    return list(module_config["actions"].get(action, []))


def permissions_for_role(role: str) -> List[str]:
    """All "module:action" names granted to a role, sorted."""
    granted = []
    for module_name, module_config in MODULES.items():
        for action, roles in module_config["actions"].items():
            if role in roles:
                granted.append(f"{module_name}:{action}")
    return sorted(granted)


def can_manage_role(caller_role: str, target_role: str) -> bool:
    return target_role in MANAGEABLE_ROLES.get(caller_role, [])


def role_home_path(role: str) -> str:
    role_config = ROLES.get(role)
    return role_config["home_path"] if role_config else "/"


def get_permission_matrix() -> Dict[str, List[str]]:
    """Returns {role: [permission, ...]} for every role."""
    return {role: permissions_for_role(role) for role in ROLES}
