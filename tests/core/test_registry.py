"""Tests for BuilderRegistry and the process default registry."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any

import pytest

from builderkit.builders import AddressBuilder, BondBuilder
from builderkit.config.settings import BuilderkitSettings
from builderkit.core.builder import Builder
from builderkit.core.errors import BuilderError, RegistryLookupError
from builderkit.core.registry import (
    BuilderRegistry,
    build_registry,
    create_builder,
    default_registry,
    set_default_registry,
)


class TestRegistry:
    def test_create_returns_fresh_builders(self, registry: BuilderRegistry) -> None:
        first = registry.create("Address")
        second = registry.create("Address")
        assert isinstance(first, AddressBuilder)
        assert first is not second
        assert first.extract() is not second.extract()

    def test_unknown_name_raises(self) -> None:
        with pytest.raises(RegistryLookupError) as exc_info:
            BuilderRegistry().create("Unicorn")
        assert exc_info.value.name == "Unicorn"
        assert str(exc_info.value) == "no builder registered for type 'Unicorn'"

    def test_lookup_error_is_a_key_error(self) -> None:
        with pytest.raises(KeyError):
            BuilderRegistry().create("Unicorn")
        assert issubclass(RegistryLookupError, BuilderError)

    def test_lookup_returns_none(self) -> None:
        assert BuilderRegistry().lookup("Unicorn") is None

    def test_last_write_wins(self) -> None:
        reg = BuilderRegistry()
        reg.register("Thing", AddressBuilder)
        reg.register("Thing", BondBuilder)
        assert isinstance(reg.create("Thing"), BondBuilder)
        assert len(reg) == 1

    def test_register_arbitrary_factory(self) -> None:
        reg = BuilderRegistry()
        reg.register("HomeAddress", AddressBuilder.with_defaults)
        built = reg.create("HomeAddress").extract()
        assert built.type == "Home"

    def test_register_builder_as_decorator(self) -> None:
        reg = BuilderRegistry()
        returned = reg.register_builder(BondBuilder)
        assert returned is BondBuilder
        assert "Bond" in reg

    def test_register_builder_with_explicit_name(self) -> None:
        reg = BuilderRegistry()
        reg.register_builder(BondBuilder, name="FixedIncome")
        assert reg.names() == ["FixedIncome"]

    def test_register_builder_without_type_name(self) -> None:
        class NamelessBuilder(Builder[Any]):
            pass

        with pytest.raises(ValueError, match="no type_name"):
            BuilderRegistry().register_builder(NamelessBuilder)

    def test_names_and_snapshot(self, registry: BuilderRegistry) -> None:
        names = registry.names()
        assert names == sorted(names)
        snapshot = registry.snapshot()
        snapshot.clear()
        assert len(registry) == len(names)


class TestConcurrency:
    def test_concurrent_register_and_create(self) -> None:
        reg = BuilderRegistry()
        reg.register("Address", AddressBuilder)
        start = threading.Barrier(8)

        def worker(i: int) -> str:
            start.wait()
            reg.register(f"Bond{i}", BondBuilder)
            for _ in range(50):
                reg.create("Address")
            return type(reg.create(f"Bond{i}")).__name__

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(worker, range(8)))

        assert results == ["BondBuilder"] * 8
        assert len(reg) == 9


class TestDefaultRegistry:
    def test_created_once(self) -> None:
        assert default_registry() is default_registry()

    def test_holds_builtin_builders(self) -> None:
        assert "Bond" in default_registry()
        assert isinstance(create_builder("Bond"), BondBuilder)

    def test_set_default_returns_previous(self) -> None:
        first = default_registry()
        replacement = BuilderRegistry()
        assert set_default_registry(replacement) is first
        assert default_registry() is replacement

    def test_explicit_empty_registry_is_used(self) -> None:
        """An empty registry must not fall back to the default."""
        with pytest.raises(RegistryLookupError):
            create_builder("Bond", registry=BuilderRegistry())


class TestBuildRegistry:
    def test_builtins_excluded(self) -> None:
        settings = BuilderkitSettings.load(registry={"include_builtins": False})
        assert len(build_registry(settings)) == 0

    def test_builtins_included(self) -> None:
        settings = BuilderkitSettings.load()
        assert build_registry(settings).names() == [
            "Address",
            "Bond",
            "BusinessProfile",
            "GeoLocation",
            "Person",
            "PersonalProfile",
            "Portfolio",
        ]
