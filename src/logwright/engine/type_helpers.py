# src/logwright/engine/type_helpers.py
"""Type introspection used by the coercion engine.

Type names in configuration are Python import paths. Accepted spellings:

- "package.module.Class" or "package.module.Outer.Inner"
- "package.module:Outer.Inner"
- "Outer+Inner, package.module" (type part first, module after the comma)
- "Class" alone, looked up among the types registered by loaded plugins

Static member accessors have the form "TypeName::member", optionally
followed by ", module" in the comma spelling above.
"""

import collections.abc
import dataclasses
import decimal
import enum
import importlib
import inspect
import pathlib
import re
import types
import typing
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union, get_args, get_origin

from logwright.contracts.errors import MemberNotFoundError, TypeLoadError
from logwright.contracts.methods import ParameterSpec, parameter_specs

if TYPE_CHECKING:
    from logwright.plugins.manager import PluginManager

_STATIC_MEMBER_ACCESSOR = re.compile(r"^\s*(?P<type>[^:]+)::(?P<member>[A-Za-z_][A-Za-z0-9_]*)(?P<extra>[^:]*)$")

_LIST_ORIGINS: frozenset[Any] = frozenset(
    {
        list,
        collections.abc.Sequence,
        collections.abc.MutableSequence,
        collections.abc.Collection,
        collections.abc.Iterable,
    }
)
_SET_ORIGINS: frozenset[Any] = frozenset({set, collections.abc.Set, collections.abc.MutableSet})
_DICT_ORIGINS: frozenset[Any] = frozenset({dict, collections.abc.Mapping, collections.abc.MutableMapping})

# Iterable, but never treated as element containers
_NOT_CONTAINERS: tuple[type, ...] = (str, bytes, bytearray, memoryview, range)

# Only ever read from a single scalar value
_SCALAR_TYPES: tuple[type, ...] = (
    str,
    bytes,
    bytearray,
    int,
    float,
    complex,
    decimal.Decimal,
    enum.Enum,
    pathlib.PurePath,
)


# =============================================================================
# Annotation shapes
# =============================================================================


def unwrap_optional(annotation: Any) -> tuple[Any, bool]:
    """Strip None from a union.

    Returns (annotation without None, whether None was a member). A union of
    several non-None members stays a union.
    """
    if get_origin(annotation) not in (Union, types.UnionType):
        return annotation, False
    members = [arg for arg in get_args(annotation) if arg is not type(None)]
    optional = len(members) != len(get_args(annotation))
    if len(members) == 1:
        return members[0], optional
    return Union[tuple(members)], optional  # noqa: UP007


def union_members(annotation: Any) -> tuple[Any, ...]:
    """Members of a union annotation, or () for anything else."""
    if get_origin(annotation) in (Union, types.UnionType):
        return get_args(annotation)
    return ()


def type_display_name(annotation: Any) -> str:
    if isinstance(annotation, type):
        return annotation.__qualname__
    return str(annotation).replace("typing.", "")


def is_polymorphic(annotation: Any) -> bool:
    """True for ABCs with abstract members and for Protocol classes."""
    if not isinstance(annotation, type):
        return False
    return inspect.isabstract(annotation) or bool(getattr(annotation, "_is_protocol", False))


def is_scalar_type(annotation: Any) -> bool:
    """True for types that only a scalar node can produce (bool and int subclasses included)."""
    return isinstance(annotation, type) and issubclass(annotation, _SCALAR_TYPES)


def callable_payload(annotation: Any) -> tuple[bool, Any]:
    """Inspect a Callable annotation.

    Returns (is_callable, payload) where payload is the single parameter type
    of Callable[[X], ...] and None for any other parameter list.
    """
    if get_origin(annotation) is not collections.abc.Callable and annotation is not collections.abc.Callable:
        return False, None
    args = get_args(annotation)
    if args and isinstance(args[0], list) and len(args[0]) == 1:
        return True, args[0][0]
    return True, None


@dataclass(frozen=True)
class ContainerShape:
    """How to build a container from a structured node.

    kind is one of "list", "set", "frozenset", "dict" for the built-in
    shapes; "append", "add", "setitem" for user classes filled through that
    operation; "empty" for iterable user classes without an insertion
    operation; "abstract" for abstract container classes.
    """

    kind: str
    factory: Any
    element_type: Any = Any
    key_type: Any = Any


def _generic_arguments(cls: type) -> tuple[Any, ...]:
    for base in getattr(cls, "__orig_bases__", ()):
        args = get_args(base)
        if args:
            return args
    return ()


def _constructible_without_arguments(cls: type) -> bool:
    return any(all(p.has_default for p in params) for params in constructor_parameters(cls))


def container_shape(annotation: Any) -> ContainerShape | None:
    """Classify annotation as a container, or None if it is not one."""
    origin = get_origin(annotation) or annotation
    args = get_args(annotation)

    if origin in _LIST_ORIGINS:
        return ContainerShape("list", list, args[0] if args else Any)
    if origin in _SET_ORIGINS:
        return ContainerShape("set", set, args[0] if args else Any)
    if origin is frozenset:
        return ContainerShape("frozenset", frozenset, args[0] if args else Any)
    if origin in _DICT_ORIGINS:
        key_type, value_type = args if len(args) == 2 else (Any, Any)
        return ContainerShape("dict", dict, value_type, key_type)

    if not isinstance(origin, type) or not issubclass(origin, collections.abc.Iterable):
        return None
    if issubclass(origin, _NOT_CONTAINERS) or issubclass(origin, tuple):
        return None
    # Models and records are constructed from fields, not filled
    if dataclasses.is_dataclass(origin) or hasattr(origin, "model_fields"):
        return None

    generic_args = args or _generic_arguments(origin)
    if inspect.isabstract(origin):
        return ContainerShape("abstract", origin)
    if not _constructible_without_arguments(origin):
        return None
    if issubclass(origin, collections.abc.Mapping) or (hasattr(origin, "__setitem__") and hasattr(origin, "keys")):
        if len(generic_args) == 2:
            key_type, value_type = generic_args
        else:
            # Registry[T] style classes parameterize the value only
            key_type, value_type = Any, generic_args[0] if generic_args else Any
        return ContainerShape("setitem", origin, value_type, key_type)
    element_type = generic_args[0] if generic_args else Any
    if hasattr(origin, "append"):
        return ContainerShape("append", origin, element_type)
    if hasattr(origin, "add"):
        return ContainerShape("add", origin, element_type)
    return ContainerShape("empty", origin, element_type)


# =============================================================================
# Constructors
# =============================================================================


def constructor_parameters(cls: type) -> list[tuple[ParameterSpec, ...]]:
    """Constructor variants of cls, in declaration order.

    typing.overload variants of __init__ count as separate constructors.
    Without overloads the class signature is used, which covers dataclasses
    and pydantic models as well.
    """
    init = cls.__dict__.get("__init__")
    overloads = typing.get_overloads(init) if init is not None else []
    if overloads:
        return [parameter_specs(inspect.signature(variant, eval_str=True), skip=1) for variant in overloads]
    try:
        signature = inspect.signature(cls, eval_str=True)
    except ValueError:
        # Builtins without introspectable signatures take no named arguments
        return [()]
    return [parameter_specs(signature)]


def has_named_parameters(cls: type) -> bool:
    """Whether the constructor of cls can be introspected for named fields."""
    init = cls.__dict__.get("__init__")
    if init is not None and typing.get_overloads(init):
        return True
    try:
        inspect.signature(cls)
    except ValueError:
        return False
    return True


# =============================================================================
# Type names
# =============================================================================


def _is_private_path(qualname: str) -> bool:
    return any(part.startswith("_") for part in qualname.split("."))


def _walk_attributes(owner: Any, path: list[str], type_name: str) -> Any:
    target = owner
    for part in path:
        if not hasattr(target, part):
            raise TypeLoadError(type_name)
        target = getattr(target, part)
    return target


def _import_module(module_name: str, type_name: str) -> Any:
    try:
        return importlib.import_module(module_name)
    except ImportError as e:
        raise TypeLoadError(type_name, f"Type `{type_name}` was not found: {e}") from e


def find_type(type_name: str, plugins: "PluginManager | None" = None, *, allow_internal: bool = False) -> Any:
    """Resolve a type name to a class or module.

    Raises:
        TypeLoadError: If the name does not resolve, or names a non-public
            type while allow_internal is False.
    """
    name = type_name.strip()
    if not name:
        raise TypeLoadError(type_name)

    if "," in name:
        qualname, module_name = (part.strip() for part in name.split(",", 1))
        qualname = qualname.replace("+", ".")
        resolved = _walk_attributes(_import_module(module_name, type_name), qualname.split("."), type_name)
    elif ":" in name:
        module_name, qualname = name.split(":", 1)
        resolved = _walk_attributes(_import_module(module_name, type_name), qualname.split("."), type_name)
    else:
        qualname = name.replace("+", ".")
        resolved = _resolve_dotted(qualname, plugins, type_name)

    if not allow_internal and _is_private_path(qualname):
        raise TypeLoadError(type_name, f"Type `{type_name}` is not public.")
    return resolved


def _resolve_dotted(qualname: str, plugins: "PluginManager | None", type_name: str) -> Any:
    parts = qualname.split(".")

    if plugins is not None:
        registered = plugins.find_type_by_name(parts[0])
        if registered is not None:
            return _walk_attributes(registered, parts[1:], type_name)

    # Longest importable module prefix wins
    for split in range(len(parts), 0, -1):
        module_name = ".".join(parts[:split])
        try:
            module = importlib.import_module(module_name)
        except ModuleNotFoundError as e:
            if e.name is not None and not module_name.startswith(e.name) and not e.name.startswith(module_name):
                # The module exists but one of its own imports failed
                raise TypeLoadError(type_name, f"Type `{type_name}` was not found: {e}") from e
            continue
        return _walk_attributes(module, parts[split:], type_name)

    import builtins

    if len(parts) == 1 and isinstance(getattr(builtins, parts[0], None), type):
        return getattr(builtins, parts[0])
    raise TypeLoadError(type_name)


# =============================================================================
# Static member accessors
# =============================================================================


@dataclass(frozen=True)
class StaticMemberAccessor:
    type_name: str
    member_name: str


def parse_static_member_accessor(value: str) -> StaticMemberAccessor | None:
    """Parse "TypeName::member[, module]"; None when value is not an accessor."""
    match = _STATIC_MEMBER_ACCESSOR.match(value)
    if match is None:
        return None
    type_name = (match.group("type") + match.group("extra")).strip()
    return StaticMemberAccessor(type_name=type_name, member_name=match.group("member"))


def resolve_static_member(
    accessor: StaticMemberAccessor,
    target: Any,
    plugins: "PluginManager | None" = None,
    *,
    allow_internal_types: bool = False,
) -> Any:
    """Return the value of a public class-level member.

    Callable targets look for static and class methods first. Properties,
    instance methods and names starting with an underscore are never
    eligible.

    Raises:
        TypeLoadError: If the owner type does not resolve.
        MemberNotFoundError: If no eligible member exists.
    """
    owner = find_type(accessor.type_name, plugins, allow_internal=allow_internal_types)
    member = accessor.member_name
    not_found = MemberNotFoundError(
        f"Could not find a public static property or field with name `{member}` on type `{accessor.type_name}`"
    )
    if member.startswith("_"):
        raise not_found

    if inspect.ismodule(owner):
        if not hasattr(owner, member):
            raise not_found
        return getattr(owner, member)

    try:
        raw = inspect.getattr_static(owner, member)
    except AttributeError:
        raise not_found from None

    is_callable_target, _ = callable_payload(target)
    if isinstance(raw, staticmethod | classmethod):
        if is_callable_target:
            return getattr(owner, member)
        raise not_found
    if isinstance(raw, property) or inspect.isfunction(raw) or inspect.ismethoddescriptor(raw):
        raise not_found
    return getattr(owner, member)
