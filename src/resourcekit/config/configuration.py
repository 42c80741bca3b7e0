from dataclasses import dataclass
from typing import Any, List


@dataclass
class Setting:
    package_name: str
    env_var: str
    group: str
    description: str
    default: Any = None
    enum: List[str] | None = None


_registry: List[Setting] = []


def register_setting(
    package_name: str,
    env_var: str,
    group: str,
    description: str,
    default: Any = None,
    enum: List[str] | None = None,
) -> List[Setting]:
    """Register a new setting.

    Parameters
    ----------
    package_name: str
        Name of the package registering the setting.
    env_var: str
        The environment variable name.
    group: str
        Group the setting belongs to.
    description: str
        Human readable description of the setting.
    default: Any
        Value used when neither settings.yaml nor the environment set it.
    enum: List[str] | None
        List of possible values for the setting.

    Returns
    -------
    List[Setting]
        The list of all registered settings.
    """
    for existing in _registry:
        if existing.env_var == env_var:
            raise ValueError(f"Setting '{env_var}' is already registered")
    setting = Setting(
        package_name=package_name,
        env_var=env_var,
        group=group,
        description=description,
        default=default,
        enum=enum,
    )
    _registry.append(setting)
    return list(_registry)


def get_settings_registry() -> List[Setting]:
    """Return the list of all registered settings."""
    return list(_registry)
