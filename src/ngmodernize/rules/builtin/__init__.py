"""Built-in rules: aggregate all categories."""

from ngmodernize.rules.builtin.components import ALL_COMPONENT_RULES
from ngmodernize.rules.builtin.imports import ALL_IMPORT_RULES
from ngmodernize.rules.builtin.manifest import ALL_MANIFEST_RULES
from ngmodernize.rules.builtin.modules import ALL_MODULE_RULES
from ngmodernize.rules.builtin.templates import ALL_TEMPLATE_RULES
from ngmodernize.rules.models import Rule

ALL_BUILTIN_RULES: list[Rule] = [
    *ALL_COMPONENT_RULES,
    *ALL_TEMPLATE_RULES,
    *ALL_MODULE_RULES,
    *ALL_IMPORT_RULES,
    *ALL_MANIFEST_RULES,
]

__all__ = ["ALL_BUILTIN_RULES"]
