"""Optional parameters for ``volume create``."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, fields

from pancli.utils.convert import format_gb

logger = logging.getLogger(__name__)

VENDOR_PREFIX = "panfs.csi.vdura.com/"

# Keywords whose value is passed quoted to the appliance
QUOTED_KEYWORDS = frozenset({"bladeset"})

# Byte-count fields rendered as gigabytes
SIZE_KEYWORDS = frozenset({"soft", "hard"})


@dataclass
class VolumeCreateParams:
    """Optional ``volume create`` parameters.

    Field order is the order the options are appended to the command.
    Empty strings and zero sizes are left out.
    """

    bladeset: str = ""
    volservice: str = ""
    soft: int = 0
    hard: int = 0
    efsa: str = ""
    description: str = ""
    recoverypriority: str = ""
    layout: str = ""
    maxwidth: str = ""
    stripeunit: str = ""
    rgwidth: str = ""
    rgdepth: str = ""
    user: str = ""
    group: str = ""
    uperm: str = ""
    gperm: str = ""
    operm: str = ""
    encryption: str = ""

    def to_args(self) -> list[str]:
        """Render the non-default options as command tokens."""
        args: list[str] = []
        for option in fields(self):
            keyword = option.name
            value = getattr(self, keyword)
            if not value:
                continue

            if keyword in SIZE_KEYWORDS:
                args.extend([keyword, format_gb(value)])
            elif keyword in QUOTED_KEYWORDS:
                args.extend([keyword, f'"{value}"'])
            else:
                args.extend([keyword, str(value)])
        return args

    @classmethod
    def from_parameters(cls, parameters: Mapping[str, str]) -> "VolumeCreateParams":
        """Build params from storage-class style keys.

        String options use ``panfs.csi.vdura.com/<option>`` keys; sizes use
        the plain ``soft`` and ``hard`` keys holding byte counts. Unknown
        keys are ignored and unparsable sizes are skipped.
        """
        values: dict[str, str | int] = {}
        for option in fields(cls):
            keyword = option.name
            if keyword in SIZE_KEYWORDS:
                raw = parameters.get(keyword, "")
                if not raw:
                    continue
                try:
                    values[keyword] = int(raw)
                except ValueError:
                    logger.warning("Ignoring non-integer %s size: %r", keyword, raw)
                continue

            raw = parameters.get(VENDOR_PREFIX + keyword, "")
            if raw:
                values[keyword] = raw

        return cls(**values)  # type: ignore[arg-type]
