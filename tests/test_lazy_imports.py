"""Tests for sprout.__init__ — lazy imports cover all public names."""

import pytest

import sprout


@pytest.mark.parametrize("name", sprout.__all__)
def test_all_names_resolve(name: str) -> None:
    """Every name in __all__ must resolve via __getattr__ without error."""
    obj = getattr(sprout, name)
    assert obj is not None, f"sprout.{name} resolved to None"


def test_resolves_to_defining_module() -> None:
    from sprout.errors import SproutError
    from sprout.pod import Pod

    assert sprout.Pod is Pod
    assert sprout.SproutError is SproutError


def test_unknown_name_raises_attribute_error() -> None:
    """Accessing an unregistered name raises AttributeError."""
    with pytest.raises(AttributeError, match="no attribute"):
        sprout.__getattr__("ThisDoesNotExist")
