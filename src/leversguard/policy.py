# src/leversguard/policy.py
import logging
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)


class Policy(BaseModel):
    """
    Fully resolved thresholds consumed by every rule.

    Field aliases follow the camelCase keys of the project policy file
    (e.g. 'titleMin', 'maxThirdPartyScriptsPerPage').
    """
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    # --- seo ---
    title_min: int = 30
    title_max: int = 60
    meta_description_min: int = 50
    meta_description_max: int = 160
    require_canonical: bool = True
    require_json_ld_for: FrozenSet[str] = Field(default_factory=frozenset)

    # --- perf ---
    max_third_party_scripts_per_page: int = 6
    lcp_image_kb: int = Field(default=200, alias="lcpImageKB")
    require_font_display_swap: bool = True

    # --- frameworks ---
    # Substrings marking a component-managed <head> (titles injected at runtime).
    head_manager_markers: Tuple[str, ...] = (
        "next/head",
        'from "next"',
        "from 'next'",
        "react-helmet",
    )
    component_extensions: Tuple[str, ...] = (".jsx", ".tsx")
    image_components: Tuple[str, ...] = ("Image",)


DEFAULT_POLICY = Policy()

# Which file section each field is read from.
POLICY_SECTIONS: Dict[str, Tuple[str, ...]] = {
    "seo": (
        "title_min", "title_max", "meta_description_min", "meta_description_max",
        "require_canonical", "require_json_ld_for",
    ),
    "perf": ("max_third_party_scripts_per_page", "lcp_image_kb", "require_font_display_swap"),
    "frameworks": ("head_manager_markers", "component_extensions", "image_components"),
}


def file_key(name: str) -> str:
    """Maps a field name to its key in the policy file."""
    return Policy.model_fields[name].alias or to_camel(name)


def _coerce(default: Any, value: Any) -> Any:
    """
    Returns the value in the shape of the default, or None when the type does not fit.
    bool is checked first because it is a subclass of int.
    """
    if isinstance(default, bool):
        return value if isinstance(value, bool) else None
    if isinstance(default, int):
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            return None
        return value
    if isinstance(default, (tuple, frozenset)):
        if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
            return None
        return frozenset(value) if isinstance(default, frozenset) else tuple(value)
    return None


def resolve_policy(raw: Optional[Mapping[str, Any]]) -> Policy:
    """
    Overlays a raw project configuration onto the defaults.

    Every field resolves on its own: a missing or wrongly typed value falls back
    to the default without affecting its neighbours. Anything that is not a
    mapping resolves to the defaults.
    """
    if not isinstance(raw, Mapping):
        if raw is not None:
            logger.warning("Policy config is not a mapping (%s). Using defaults.", type(raw).__name__)
        return DEFAULT_POLICY

    overrides: Dict[str, Any] = {}
    for section_name, field_names in POLICY_SECTIONS.items():
        section = raw.get(section_name)
        if section is None:
            continue
        if not isinstance(section, Mapping):
            logger.warning("Policy section '%s' is not an object. Ignored.", section_name)
            continue

        for name in field_names:
            key = file_key(name)
            if key not in section:
                continue
            default = getattr(DEFAULT_POLICY, name)
            value = _coerce(default, section[key])
            if value is None:
                logger.warning(
                    "Policy field '%s.%s' has invalid value %r. Using default %r.",
                    section_name, key, section[key], default
                )
                continue
            overrides[name] = value

    if not overrides:
        return DEFAULT_POLICY
    return DEFAULT_POLICY.model_copy(update=overrides)
