#!/usr/bin/env python3
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import segno


@dataclass(frozen=True)
class QrConfig:
    error: str = "L"
    border: int = 4
    module_dots: int = 2
    bold_module_dots: int = 3
    version: int | None = None
    mask: int | None = None
    boost_error: bool = False


def make_qr(
    data: bytes | str,
    *,
    error: str = "L",
    version: int | None = None,
    mask: int | None = None,
    boost_error: bool = False,
) -> Any:
    return segno.make(
        data,
        error=error,
        version=version,
        mask=mask,
        micro=False,
        boost_error=boost_error,
    )


class SegnoQrGenerator:
    def __init__(
        self,
        *,
        version: int | None = None,
        mask: int | None = None,
        boost_error: bool = False,
    ) -> None:
        self.version = version
        self.mask = mask
        self.boost_error = boost_error

    @classmethod
    def from_config(cls, config: QrConfig) -> SegnoQrGenerator:
        return cls(version=config.version, mask=config.mask, boost_error=config.boost_error)

    def matrix(self, data: bytes, *, error: str, border: int) -> list[list[bool]]:
        qr = make_qr(
            data,
            error=error,
            version=self.version,
            mask=self.mask,
            boost_error=self.boost_error,
        )
        return [[bool(is_dark) for is_dark in row] for row in qr.matrix_iter(scale=1, border=border)]
