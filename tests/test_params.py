"""Tests for volume create parameters."""

import pytest

from pancli.models import VolumeCreateParams
from pancli.models.params import VENDOR_PREFIX

GIB = 2**30


@pytest.mark.parametrize(
    ("params", "expected"),
    [
        (VolumeCreateParams(), []),
        (VolumeCreateParams(bladeset="Set 1"), ["bladeset", '"Set 1"']),
        (
            VolumeCreateParams(volservice="0x0400000000000004", efsa="retry"),
            ["volservice", "0x0400000000000004", "efsa", "retry"],
        ),
        (
            VolumeCreateParams(soft=GIB, hard=2 * GIB),
            ["soft", "1.00", "hard", "2.00"],
        ),
        (
            VolumeCreateParams(layout="raid6+", maxwidth="8", stripeunit="64K", rgwidth="8", rgdepth="1"),
            ["layout", "raid6+", "maxwidth", "8", "stripeunit", "64K", "rgwidth", "8", "rgdepth", "1"],
        ),
        (
            VolumeCreateParams(user="root", group="root", uperm="rwx", gperm="r-x", operm="r-x"),
            ["user", "root", "group", "root", "uperm", "rwx", "gperm", "r-x", "operm", "r-x"],
        ),
    ],
)
def test_to_args(params, expected) -> None:
    assert params.to_args() == expected


def test_to_args_full_order() -> None:
    params = VolumeCreateParams(
        bladeset="Set 1",
        volservice="vs",
        soft=3 * GIB // 2,
        hard=5 * GIB,
        efsa="retry",
        description="scratch",
        recoverypriority="50",
        layout="raid6+",
        maxwidth="8",
        stripeunit="64K",
        rgwidth="8",
        rgdepth="1",
        user="u",
        group="g",
        uperm="rwx",
        gperm="r-x",
        operm="---",
        encryption="on",
    )

    assert params.to_args() == [
        "bladeset", '"Set 1"',
        "volservice", "vs",
        "soft", "1.50",
        "hard", "5.00",
        "efsa", "retry",
        "description", "scratch",
        "recoverypriority", "50",
        "layout", "raid6+",
        "maxwidth", "8",
        "stripeunit", "64K",
        "rgwidth", "8",
        "rgdepth", "1",
        "user", "u",
        "group", "g",
        "uperm", "rwx",
        "gperm", "r-x",
        "operm", "---",
        "encryption", "on",
    ]  # fmt: skip


def test_zero_sizes_are_omitted() -> None:
    assert VolumeCreateParams(soft=0, hard=GIB).to_args() == ["hard", "1.00"]


class TestFromParameters:
    """Tests for building params from storage-class keys."""

    def test_vendor_keys(self) -> None:
        params = VolumeCreateParams.from_parameters(
            {
                VENDOR_PREFIX + "bladeset": "Set 1",
                VENDOR_PREFIX + "layout": "raid6+",
                VENDOR_PREFIX + "uperm": "rwx",
            }
        )

        assert params == VolumeCreateParams(bladeset="Set 1", layout="raid6+", uperm="rwx")

    def test_sizes_use_plain_keys(self) -> None:
        params = VolumeCreateParams.from_parameters({"soft": str(GIB), "hard": "2147483648"})

        assert params.soft == GIB
        assert params.hard == 2 * GIB

    def test_unprefixed_option_is_ignored(self) -> None:
        params = VolumeCreateParams.from_parameters({"bladeset": "Set 1", "unknown": "x"})

        assert params == VolumeCreateParams()

    def test_invalid_size_is_skipped(self) -> None:
        params = VolumeCreateParams.from_parameters({"soft": "ten", "hard": "1024"})

        assert params.soft == 0
        assert params.hard == 1024
