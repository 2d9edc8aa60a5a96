"""Declared output types and the resolution of their fields against raw records.

A field is either *direct* (a lookup of its own name on the parent record) or
*computed* (a pure function of the parent record). Every field resolves on its
own: no resolver sees the result of a sibling, so fields may be evaluated in
any order.
"""
import enum
import typing
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from graphql import GraphQLField, GraphQLInt, GraphQLObjectType, GraphQLScalarType, GraphQLString

RawRecord = typing.Mapping[str, typing.Any]
OutputRecord = typing.Mapping[str, typing.Any]
Transform = typing.Callable[[RawRecord], typing.Any]


class FieldKind(enum.Enum):
    DIRECT = 'direct'
    COMPUTED = 'computed'


@dataclass(frozen=True)
class FieldSpec:
    name: str
    type: GraphQLScalarType
    transform: typing.Optional[Transform] = None
    description: typing.Optional[str] = None

    @classmethod
    def direct(cls, name: str, type_: GraphQLScalarType, description: str = None) -> 'FieldSpec':
        return cls(name=name, type=type_, description=description)

    @classmethod
    def computed(
        cls, name: str, type_: GraphQLScalarType, transform: Transform, description: str = None
    ) -> 'FieldSpec':
        return cls(name=name, type=type_, transform=transform, description=description)

    @property
    def kind(self) -> FieldKind:
        return FieldKind.DIRECT if self.transform is None else FieldKind.COMPUTED


def resolve_field(spec: FieldSpec, record: typing.Any) -> typing.Any:
    if not isinstance(record, Mapping):
        return None
    if spec.kind is FieldKind.COMPUTED:
        return spec.transform(record)
    return record.get(spec.name)


def rename(key: str) -> Transform:
    """Build a transform reading ``key`` from the parent record."""

    def transform(record: RawRecord) -> typing.Any:
        return record.get(key)

    transform.__name__ = f'from_{key}'
    return transform


@dataclass(frozen=True)
class TypeRegistry:
    name: str
    fields: typing.Tuple[FieldSpec, ...]
    description: typing.Optional[str] = None

    def __post_init__(self) -> None:
        # Freeze whatever iterable the caller passed in.
        object.__setattr__(self, 'fields', tuple(self.fields))
        names = [spec.name for spec in self.fields]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f'Duplicate fields on {self.name}: {", ".join(duplicates)}')

    @property
    def field_names(self) -> typing.List[str]:
        return [spec.name for spec in self.fields]

    def field(self, name: str) -> FieldSpec:
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(f'{self.name} has no field {name!r}')

    def resolve(
        self, record: typing.Any, requested: typing.Iterable[str] = None
    ) -> OutputRecord:
        names = self.field_names if requested is None else list(requested)
        resolved = {name: resolve_field(self.field(name), record) for name in names}
        return MappingProxyType(resolved)

    def to_graphql_type(self) -> GraphQLObjectType:
        return GraphQLObjectType(
            name=self.name,
            description=self.description,
            fields=lambda: {
                spec.name: GraphQLField(
                    spec.type, description=spec.description, resolve=_field_resolver(spec)
                )
                for spec in self.fields
            },
        )


def _field_resolver(spec: FieldSpec) -> typing.Callable:
    def resolve(parent, info):
        return resolve_field(spec, parent)

    return resolve


USER_FIELDS = (
    FieldSpec.direct('name', GraphQLString),
    FieldSpec.direct('email', GraphQLString),
    FieldSpec.computed('about', GraphQLString, rename('bio'), description='Profile bio.'),
    FieldSpec.direct('following', GraphQLInt),
    FieldSpec.direct('followers', GraphQLInt),
)


def make_user_registry() -> TypeRegistry:
    return TypeRegistry(name='UserType', fields=USER_FIELDS, description='A GitHub user profile.')
