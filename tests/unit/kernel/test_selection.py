"""Unit tests for kernel selection and cleanup planning."""

import logging
from pathlib import Path

import pytest
from kernel_janitor.kernel.errors import SelectionError
from kernel_janitor.kernel.models import InstalledKernel
from kernel_janitor.kernel.selection import (
    number_kernels,
    parse_running_release,
    plan_cleanup,
    select_kernels,
)
from kernel_janitor.kernel.version import KernelVersion


def complete(version: KernelVersion) -> InstalledKernel:
    """Build a complete record with placeholder paths."""
    name = str(version)
    return InstalledKernel(
        version=version,
        module_path=Path(f"/lib/modules/{name}"),
        source_path=Path(f"/usr/src/linux-{name}"),
        image_path=Path(f"/boot/vmlinuz-{name}"),
        config_path=Path(f"/boot/config-{name}"),
        system_map_path=Path(f"/boot/System.map-{name}"),
    )


def versions(kernels: list[InstalledKernel]) -> list[str]:
    return [str(k.version) for k in kernels]


@pytest.fixture
def kernels() -> list[InstalledKernel]:
    """Five complete kernels, oldest first."""
    return [
        complete(KernelVersion(4, 19, 3)),
        complete(KernelVersion(5, 4, 90)),
        complete(KernelVersion(5, 4, 97)),
        complete(KernelVersion(5, 10, 1)),
        complete(KernelVersion(6, 1, 0)),
    ]


class TestNumberKernels:
    """Tests for number_kernels."""

    def test_one_based(self, kernels: list[InstalledKernel]) -> None:
        """Ordinals start at 1."""
        numbered = number_kernels(kernels)

        assert [n for n, _ in numbered] == [1, 2, 3, 4, 5]
        assert numbered[0][1] is kernels[0]

    def test_empty(self) -> None:
        """No kernels, no ordinals."""
        assert number_kernels([]) == []


class TestSelectKernels:
    """Tests for select_kernels."""

    def test_selects_in_list_order(self, kernels: list[InstalledKernel]) -> None:
        """Selections follow list order, not argument order."""
        selected = select_kernels(kernels, [4, 1])

        assert versions(selected) == ["4.19.3", "5.10.1"]

    def test_duplicates_collapsed(self, kernels: list[InstalledKernel]) -> None:
        """Repeated ordinals select a kernel once."""
        assert len(select_kernels(kernels, [2, 2, 2])) == 1

    @pytest.mark.parametrize("ordinal", [0, 6, -1])
    def test_out_of_range(self, kernels: list[InstalledKernel], ordinal: int) -> None:
        """Ordinals outside 1..N are rejected."""
        with pytest.raises(SelectionError, match="valid range: 1-5") as exc_info:
            select_kernels(kernels, [1, ordinal])

        assert exc_info.value.ordinal == ordinal

    def test_no_kernels(self) -> None:
        """Selecting from an empty list names the problem."""
        with pytest.raises(SelectionError, match="no kernels installed"):
            select_kernels([], [1])


class TestParseRunningRelease:
    """Tests for parse_running_release."""

    def test_release(self) -> None:
        """uname -r output parses as a version."""
        assert parse_running_release("5.4.97-gentoo") == KernelVersion(5, 4, 97)

    def test_empty(self) -> None:
        """Empty or missing releases give None."""
        assert parse_running_release(None) is None
        assert parse_running_release("") is None

    def test_unparsable_logged(self, caplog) -> None:
        """An unreadable release gives None and a warning."""
        with caplog.at_level(logging.WARNING):
            assert parse_running_release("6.1") is None

        assert "6.1" in caplog.text


class TestPlanCleanup:
    """Tests for plan_cleanup."""

    def test_keeps_newest(self, kernels: list[InstalledKernel]) -> None:
        """The newest N kernels are kept, the rest removed oldest first."""
        plan = plan_cleanup(kernels, 2)

        assert versions(plan.keep) == ["5.10.1", "6.1.0"]
        assert versions(plan.remove) == ["4.19.3", "5.4.90", "5.4.97"]
        assert plan.skipped == []

    def test_keep_more_than_installed(self, kernels: list[InstalledKernel]) -> None:
        """Keeping more kernels than installed removes nothing."""
        plan = plan_cleanup(kernels, 10)

        assert plan.is_empty
        assert len(plan.keep) == 5

    def test_running_kernel_kept(self, kernels: list[InstalledKernel]) -> None:
        """The booted kernel is never removed."""
        plan = plan_cleanup(kernels, 1, running_release="5.4.90-gentoo")

        assert versions(plan.keep) == ["5.4.90", "6.1.0"]
        assert "5.4.90" not in versions(plan.remove)

    def test_running_kernel_keeps_legacy_twin(self) -> None:
        """Both installs of the running version are kept."""
        kernels = [
            complete(KernelVersion(5, 4, 97, is_legacy=True)),
            complete(KernelVersion(5, 4, 97)),
            complete(KernelVersion(6, 1, 0)),
        ]

        plan = plan_cleanup(kernels, 1, running_release="5.4.97-gentoo")

        assert plan.is_empty

    def test_legacy_kept_with_counterpart(self) -> None:
        """A legacy install and its counterpart are kept together."""
        kernels = [
            complete(KernelVersion(5, 4, 97)),
            complete(KernelVersion(6, 1, 0, is_legacy=True)),
            complete(KernelVersion(6, 1, 0)),
        ]

        plan = plan_cleanup(kernels, 2)

        assert versions(plan.keep) == ["6.1.0.old", "6.1.0"]
        assert versions(plan.remove) == ["5.4.97"]

    def test_legacy_removed_before_counterpart(self) -> None:
        """The legacy install is older, so it goes first."""
        kernels = [
            complete(KernelVersion(6, 1, 0, is_legacy=True)),
            complete(KernelVersion(6, 1, 0)),
        ]

        plan = plan_cleanup(kernels, 1)

        assert versions(plan.keep) == ["6.1.0"]
        assert versions(plan.remove) == ["6.1.0.old"]

    def test_incomplete_skipped(self, kernels: list[InstalledKernel], caplog) -> None:
        """Incomplete kernels are skipped with a warning."""
        kernels[0].image_path = None

        with caplog.at_level(logging.WARNING):
            plan = plan_cleanup(kernels, 3)

        assert versions(plan.skipped) == ["4.19.3"]
        assert versions(plan.remove) == ["5.4.90"]
        assert "image_path" in caplog.text

    def test_invalid_keep_count(self, kernels: list[InstalledKernel]) -> None:
        """At least one kernel must be kept."""
        with pytest.raises(ValueError, match="at least 1"):
            plan_cleanup(kernels, 0)

    def test_no_kernels(self) -> None:
        """An empty list plans nothing."""
        assert plan_cleanup([], 3).is_empty
