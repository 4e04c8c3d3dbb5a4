"""Tests for convention registration."""

from conventions import (
    ConventionBuilder,
    DerivedFromMatcher,
    ExactTypeMatcher,
    ExportConvention,
    ExportDescriptor,
    Member,
    PartConventionBuilder,
    PredicateMatcher,
)


class IFoo:
    pass


class FooImpl(IFoo):
    pass


class Unrelated:
    pass


class TestConventionBuilder:
    """Tests for ConventionBuilder scoping."""

    def test_empty(self):
        builder = ConventionBuilder()

        assert len(builder) == 0
        assert builder.conventions == ()

    def test_for_type_binds_exact_matcher(self):
        part = ConventionBuilder().for_type(FooImpl)

        assert isinstance(part, PartConventionBuilder)
        assert part.matcher == ExactTypeMatcher(FooImpl)

    def test_for_types_derived_from_binds_derived_matcher(self):
        part = ConventionBuilder().for_types_derived_from(IFoo)

        assert part.matcher == DerivedFromMatcher(IFoo)

    def test_for_types_matching_binds_predicate(self):
        def predicate(t):
            return True

        part = ConventionBuilder().for_types_matching(predicate)

        assert part.matcher == PredicateMatcher(predicate)

    def test_scoping_alone_registers_nothing(self):
        builder = ConventionBuilder()
        builder.for_type(FooImpl)

        assert len(builder) == 0

    def test_registration_order_kept(self):
        builder = ConventionBuilder()
        builder.for_type(FooImpl).export_as(IFoo)
        builder.for_types_derived_from(IFoo).export()

        matchers = [c.matcher for c in builder.conventions]

        assert matchers == [ExactTypeMatcher(FooImpl), DerivedFromMatcher(IFoo)]

    def test_conventions_for_filters_by_type(self):
        builder = ConventionBuilder()
        builder.for_type(FooImpl).export()
        builder.for_type(Unrelated).export()
        builder.for_types_derived_from(IFoo).export()

        assert len(builder.conventions_for(FooImpl)) == 2
        assert len(builder.conventions_for(Unrelated)) == 1
        assert builder.conventions_for(int) == []

    def test_registration_does_not_call_configure(self):
        calls = []
        builder = ConventionBuilder()
        builder.for_type(FooImpl).export(lambda e: calls.append(e))

        assert calls == []


class TestPartConventionBuilder:
    """Tests for export registration on a scoped handle."""

    def test_export_returns_handle(self):
        part = ConventionBuilder().for_type(FooImpl)

        assert part.export() is part
        assert part.export_as(IFoo) is part
        assert part.export_properties() is part

    def test_each_export_is_independent(self):
        builder = ConventionBuilder()
        builder.for_types_derived_from(IFoo).export().export(lambda e: e.as_contract_name("x"))

        assert len(builder) == 2

    def test_export_without_configure(self):
        builder = ConventionBuilder()
        builder.for_type(FooImpl).export()

        convention = builder.conventions[0]

        assert convention.configure is None
        assert convention.materialize(FooImpl) == [ExportDescriptor()]

    def test_export_as_sets_contract_type(self):
        builder = ConventionBuilder()
        builder.for_type(FooImpl).export_as(IFoo)

        assert builder.conventions[0].materialize(FooImpl) == [ExportDescriptor(IFoo)]

    def test_export_properties_is_member_level(self):
        builder = ConventionBuilder()
        builder.for_type(FooImpl).export_properties(lambda m: m.name == "a")

        convention = builder.conventions[0]

        assert convention.is_member_level
        assert not convention.applies_to(FooImpl)
        assert convention.applies_to(FooImpl, Member(FooImpl, "a"))
        assert not convention.applies_to(FooImpl, Member(FooImpl, "b"))


class TestExportConvention:
    """Tests for ExportConvention."""

    def test_type_level_ignores_member_queries(self):
        convention = ExportConvention(ExactTypeMatcher(FooImpl))

        assert convention.applies_to(FooImpl)
        assert not convention.applies_to(FooImpl, Member(FooImpl, "a"))

    def test_materialize_uses_fresh_builder(self):
        convention = ExportConvention(
            ExactTypeMatcher(FooImpl), lambda e: e.add_metadata("k", "v")
        )

        first = convention.materialize(FooImpl)
        second = convention.materialize(FooImpl)

        assert len(first) == len(second) == 2
