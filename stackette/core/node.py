from __future__ import annotations

"""Base resource record for Stackette templates."""

from typing import Any, Dict, Mapping, Set

from stackette.core.construct import Construct
from stackette.core.tokens import GetAtt, Ref, references, resolve
from stackette.utils.events import publish, ResourceAdded
from stackette.utils.ids import pascal_case

__all__ = ["CfnResource"]


def _render_keys(value: Any) -> Any:
    """PascalCase every dict key below *value* (tokens are rendered first)."""
    if isinstance(value, dict) and not ("Ref" in value or "Fn::GetAtt" in value):
        return {pascal_case(k): _render_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_render_keys(v) for v in value]
    return value


class CfnResource(Construct):
    """A single declarative resource record.

    *properties* use the camelCase field names of the resource schema.  Any
    property whose value is ``None`` is dropped, so an option that was not
    supplied never shows up as a present-but-empty field.
    """

    resource_type: str = ""
    # Properties whose nested keys are data, not schema fields.
    verbatim_properties: frozenset = frozenset()

    def __init__(self, scope: Construct, id: str, *, properties: Mapping[str, Any] | None = None) -> None:
        super().__init__(scope, id)
        if not self.resource_type:
            raise ValueError(f"{type(self).__name__} does not declare a resource_type")

        self.properties: Dict[str, Any] = {
            k: v for k, v in (properties or {}).items() if v is not None
        }
        stack = self.stack
        self.logical_id = stack.allocate_logical_id(self)

        publish(
            ResourceAdded(
                stack=stack.id,
                path=self.path,
                logical_id=self.logical_id,
                resource_type=self.resource_type,
            )
        )

    # -------------------------------------------------- #
    @property
    def ref(self) -> Ref:
        return Ref(self.logical_id)

    def get_att(self, attribute: str) -> GetAtt:
        return GetAtt(self.logical_id, attribute)

    def dependencies(self) -> Set[str]:
        """Logical ids referenced by this resource's properties."""
        return {target for target in references(self.properties) if target != self.logical_id}

    # -------------------------------------------------- #
    def to_cfn(self) -> Dict[str, Any]:
        rendered: Dict[str, Any] = {"Type": self.resource_type}
        if self.properties:
            rendered["Properties"] = {
                pascal_case(k): resolve(v) if k in self.verbatim_properties else _render_keys(resolve(v))
                for k, v in self.properties.items()
            }
        return rendered
