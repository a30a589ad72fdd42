"""Builders referring to each other."""

from __future__ import annotations

from builderdocs.vocabulary import MappingListBuilder


class ForkBuilder:
    """Splits the flow into branches."""

    def label(self, label: str) -> ForkBuilder:
        """Label of the fork."""
        return self

    def branches(self) -> BranchListBuilder:
        """Branches of the fork."""
        return BranchListBuilder()


class BranchBuilder:
    """One branch of a fork."""

    def weight(self, weight: float) -> BranchBuilder:
        """Relative weight of the branch."""
        return self

    def forks(self) -> ForkListBuilder:
        """Nested forks."""
        return ForkListBuilder()


class BranchListBuilder(MappingListBuilder):
    def add_item(self) -> BranchBuilder:
        """Branch definition."""
        return BranchBuilder()


class ForkListBuilder(MappingListBuilder):
    def add_item(self) -> ForkBuilder:
        """Fork definition."""
        return ForkBuilder()


class ParentBuilder:
    """Parent of a child."""

    def name(self, name: str) -> ParentBuilder:
        """Name of the parent."""
        return self

    def child(self) -> ChildBuilder:
        """The child."""
        return ChildBuilder()


class ChildBuilder:
    """Child of a parent."""

    def age(self, age: int) -> ChildBuilder:
        """Age of the child."""
        return self

    def parent(self) -> ParentBuilder:
        """Back to the parent."""
        return ParentBuilder()


class TargetBuilder:
    """Target of the exclusion checks."""

    def size(self, size: int) -> TargetBuilder:
        """Size of the target."""
        return self


class ExclusionBuilder:
    """Builder with scope-closing method names."""

    def end(self) -> TargetBuilder:
        return TargetBuilder()

    def endFoo(self) -> TargetBuilder:
        return TargetBuilder()

    def endSequence(self) -> TargetBuilder:
        return TargetBuilder()

    def end_phase(self) -> TargetBuilder:
        return TargetBuilder()

    def endless(self) -> TargetBuilder:
        """Never ending target."""
        return TargetBuilder()

    def again(self) -> ExclusionBuilder:
        """Returns its own builder."""
        return self
