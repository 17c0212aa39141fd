from __future__ import annotations

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Generator
from typing import Any

import pytest

from squiggle_core.dists.symbolic.registry import reset_symbolic_families
from squiggle_core.library.stdlib import reset_std_lib

pytest.importorskip("scipy")


@pytest.fixture(autouse=True)
def _fresh_registries() -> Generator[None, Any, None]:
    reset_symbolic_families()
    reset_std_lib()
    yield
