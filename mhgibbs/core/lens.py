"""
Functional accessors for fields of an opaque model value
"""

# Imports
import copy
import dataclasses
from typing import Any, Callable, Generic, Mapping, MutableMapping, TypeVar

M = TypeVar("M")
T = TypeVar("T")


class Lens(Generic[M, T]):
    """
    A getter/setter pair isolating one field of a model.

    The setter must never mutate its input: it returns a new model which is
    identical to the old one apart from the targeted field.

    Examples:
        >>> from dataclasses import dataclass, replace
        >>> @dataclass(frozen=True)
        ... class Model:
        ...     x: float
        >>> lens = Lens(lambda m: m.x, lambda m, v: replace(m, x=v))
        >>> lens.set(Model(x=1.0), 2.0)
        Model(x=2.0)
    """

    __slots__ = ("_get", "_set", "name")

    def __init__(self, get: Callable[[M], T], set: Callable[[M, T], M], name: str = "lens"):
        self._get = get
        self._set = set
        self.name = name

    def get(self, model: M) -> T:
        """Retrieve the field from `model`"""
        return self._get(model)

    def set(self, model: M, value: T) -> M:
        """Return a copy of `model` with the field set to `value`"""
        return self._set(model, value)

    def __repr__(self) -> str:
        return f"Lens({self.name!r})"


def _set_field(model: Any, name: str, value: Any) -> Any:
    if dataclasses.is_dataclass(model) and not isinstance(model, type):
        return dataclasses.replace(model, **{name: value})
    if hasattr(model, "_replace"):
        # namedtuple
        return model._replace(**{name: value})
    if isinstance(model, MutableMapping):
        new_model = copy.copy(model)
        new_model[name] = value
        return new_model
    if isinstance(model, Mapping):
        items = dict(model)
        items[name] = value
        try:
            return type(model)(items)
        except TypeError:
            return items
    new_model = copy.copy(model)
    setattr(new_model, name, value)
    return new_model


def _get_field(model: Any, name: str) -> Any:
    if isinstance(model, Mapping):
        return model[name]
    return getattr(model, name)


def make_lens(name: str) -> Lens:
    """
    Build a lens for the field `name`.

    Works on dataclasses, namedtuples, mappings and plain objects (the
    latter are shallow-copied before the attribute is set). Mutable
    mappings are shallow-copied, so their type is kept; read-only mappings
    are rebuilt with their type's constructor when it accepts a dict, and
    become a plain dict otherwise.
    """
    return Lens(
        lambda model: _get_field(model, name),
        lambda model, value: _set_field(model, name, value),
        name=name,
    )
