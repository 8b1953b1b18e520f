"""Tests for structval.records module."""

import pytest

from structval.errors import SchemaError
from structval.records import Choice, Record


class Point(Record):
    x: int
    y: int


class Pair(Record, layout="positional"):
    left: int
    right: str


class Marker(Record, layout="unit"):
    pass


class Animal(Choice):
    pass


class Cat(Animal, layout="unit"):
    pass


class Dog(Animal, name="Hound"):
    name: str


class TestRecordBasics:
    """Test basic Record functionality."""

    def test_subclass_becomes_dataclass(self) -> None:
        """Test that Record subclasses are automatically dataclasses."""
        point = Point(x=1, y=2)
        assert point.x == 1
        assert point.y == 2

    def test_positional_construction(self) -> None:
        """Test that fields can also be given positionally."""
        assert Pair(1, "a") == Pair(left=1, right="a")

    def test_record_is_frozen(self) -> None:
        """Test that Record instances are immutable."""
        point = Point(x=1, y=2)
        with pytest.raises((AttributeError, TypeError)):
            point.x = 5

    def test_default_layout_is_named(self) -> None:
        """Test the layout of a record declared without keywords."""
        assert Point.layout == "named"

    def test_layout_keyword(self) -> None:
        """Test that the layout keyword is recorded on the class."""
        assert Pair.layout == "positional"
        assert Marker.layout == "unit"

    def test_layout_not_inherited_implicitly(self) -> None:
        """Test that a subclass of a positional record defaults to named."""

        class Child(Pair):
            pass

        assert Child.layout == "named"

    def test_unknown_layout_rejected(self) -> None:
        """Test that an unknown layout raises SchemaError."""
        with pytest.raises(SchemaError, match="Unknown layout"):

            class Broken(Record, layout="columnar"):  # type: ignore[arg-type]
                x: int

    def test_unit_with_fields_rejected(self) -> None:
        """Test that a unit record cannot declare fields."""
        with pytest.raises(SchemaError, match="cannot declare fields"):

            class Broken(Record, layout="unit"):
                x: int

    def test_name_outside_enum_rejected(self) -> None:
        """Test that only enum variants take a name."""
        with pytest.raises(SchemaError, match="not an enum variant"):

            class Broken(Record, name="other"):
                x: int


class TestChoice:
    """Test enum declaration and variant registration."""

    def test_enum_root(self) -> None:
        """Test that a direct Choice subclass is its own enum root."""
        assert Animal.enum_root is Animal
        assert Cat.enum_root is Animal

    def test_variants_in_declaration_order(self) -> None:
        """Test that variants are registered in order under their names."""
        assert list(Animal.variants) == ["Cat", "Hound"]
        assert Animal.variants["Hound"] is Dog

    def test_variant_name_defaults_to_class_name(self) -> None:
        """Test automatic and explicit variant names."""
        assert Cat.variant_name == "Cat"
        assert Dog.variant_name == "Hound"

    def test_variants_are_instances_of_the_enum(self) -> None:
        """Test that variant instances are instances of the enum class."""
        assert isinstance(Dog(name="Rex"), Animal)

    def test_enums_do_not_share_variants(self) -> None:
        """Test that each enum root keeps its own registry."""

        class Color(Choice):
            pass

        class Red(Color, layout="unit"):
            pass

        assert list(Color.variants) == ["Red"]
        assert "Red" not in Animal.variants

    def test_duplicate_variant_name_rejected(self) -> None:
        """Test that two variants cannot share a name."""

        class Fruit(Choice):
            pass

        class Apple(Fruit, layout="unit"):
            pass

        with pytest.raises(SchemaError, match="already registered"):

            class Other(Fruit, name="Apple"):
                pass

    def test_enum_root_cannot_have_fields(self) -> None:
        """Test that fields belong on variants, not on the enum."""
        with pytest.raises(SchemaError, match="cannot declare fields"):

            class Broken(Choice):
                x: int

    def test_enum_root_cannot_take_layout(self) -> None:
        """Test that the enum itself has no layout."""
        with pytest.raises(SchemaError, match="cannot take a layout"):

            class Broken(Choice, layout="unit"):
                pass
