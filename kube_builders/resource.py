"""Representation of resources held in the remote object store.

Every custom resource kind in the schema catalog derives from `BaseResource`,
which carries the object metadata and knows how to serialize itself to the
wire representation used by the Kubernetes API (camelCase field names with
`apiVersion` and `kind` at the top level).
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar, Self

from mashumaro import DataClassDictMixin, field_options
from mashumaro.codecs.yaml import yaml_decode, yaml_encode
from mashumaro.config import BaseConfig

from .exceptions import BuilderValidationError

__all__ = [
    "NamedResource",
    "ObjectMeta",
    "LabelSelector",
    "LabelSelectorRequirement",
    "BaseResource",
]


@dataclass(frozen=True, order=True)
class NamedResource:
    """Identifier for a kubernetes resource."""

    kind: str
    namespace: str | None
    name: str

    @property
    def namespaced_name(self) -> str:
        if self.namespace:
            return f"{self.namespace}/{self.name}"
        return self.name

    def __str__(self) -> str:
        """Return the kind and namespaced name concatenated as an id."""
        return f"{self.kind}/{self.namespaced_name}"


@dataclass
class BaseSchema(DataClassDictMixin):
    """Base class for all serializable schema objects."""

    class Config(BaseConfig):
        omit_none = True
        serialize_by_alias = True


@dataclass
class ObjectMeta(BaseSchema):
    """Metadata common to all resources."""

    name: str = ""
    """The name of the object."""

    namespace: str | None = None
    """The namespace of the object, unset for cluster scoped kinds."""

    labels: dict[str, str] | None = None
    """Labels attached to the object."""

    annotations: dict[str, str] | None = None
    """Annotations attached to the object."""

    resource_version: str | None = field(
        metadata=field_options(alias="resourceVersion"), default=None
    )
    """Opaque version assigned by the store on every write."""

    uid: str | None = None
    """Unique id assigned by the store on creation."""


@dataclass
class LabelSelectorRequirement(BaseSchema):
    """A label selector requirement e.g. `app In (web, api)`."""

    key: str
    operator: str
    values: list[str] | None = None


@dataclass
class LabelSelector(BaseSchema):
    """A label query over a set of resources."""

    match_labels: dict[str, str] | None = field(
        metadata=field_options(alias="matchLabels"), default=None
    )
    """A map of exact label matches."""

    match_expressions: list[LabelSelectorRequirement] | None = field(
        metadata=field_options(alias="matchExpressions"), default=None
    )
    """A list of label selector requirements, all of which must match."""


@dataclass
class BaseResource(BaseSchema):
    """Base class for all resources in the schema catalog.

    Subclasses declare the `api_version` and `kind` of the resource and add
    their own `spec` and `status` payloads.
    """

    api_version: ClassVar[str]
    """The apiVersion of the resource e.g. `metallb.io/v1beta2`."""

    kind: ClassVar[str]
    """The kind of the resource e.g. `BGPPeer`."""

    namespaced: ClassVar[bool] = True
    """False for cluster scoped kinds such as Namespace."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    """The object metadata."""

    @property
    def name(self) -> str:
        """Return the name of the resource."""
        return self.metadata.name

    @property
    def namespace(self) -> str | None:
        """Return the namespace of the resource."""
        return self.metadata.namespace

    @property
    def resource_id(self) -> NamedResource:
        """Return the identifier used to key the resource in the store."""
        return NamedResource(self.kind, self.metadata.namespace, self.metadata.name)

    @classmethod
    def __pre_deserialize__(cls, d: dict[Any, Any]) -> dict[Any, Any]:
        if (kind := d.get("kind")) and kind != cls.kind:
            raise BuilderValidationError(
                f"Invalid object expected kind '{cls.kind}' but got '{kind}'"
            )
        return {k: v for k, v in d.items() if k not in ("apiVersion", "kind")}

    def __post_serialize__(self, d: dict[Any, Any]) -> dict[Any, Any]:
        return {"apiVersion": self.api_version, "kind": self.kind, **d}

    @classmethod
    def parse_yaml(cls, content: str) -> Self:
        """Parse a serialized resource."""
        if not content.strip():
            raise BuilderValidationError(f"Invalid {cls.kind} document: {content!r}")
        return yaml_decode(content, cls)

    def yaml(self) -> str:
        """Return a YAML string representation of the resource."""
        return yaml_encode(self, self.__class__)  # type: ignore[return-value]
