from vistas.props.animator import (
    BobPolicy,
    PropPolicy,
    PropTransform,
    SpinPolicy,
    SwayPolicy,
    policy_from_dict,
    policy_to_dict,
    step_prop,
)
from vistas.props.assets import AssetLoader, AssetSlot, SlotStatus, load_asset, load_asset_async

__all__ = [
    "BobPolicy",
    "PropPolicy",
    "PropTransform",
    "SpinPolicy",
    "SwayPolicy",
    "policy_from_dict",
    "policy_to_dict",
    "step_prop",
    "AssetLoader",
    "AssetSlot",
    "SlotStatus",
    "load_asset",
    "load_asset_async",
]
