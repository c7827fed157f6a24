# -*- coding: Utf-8 -*-

from __future__ import annotations

import os

################################## Environment initialization ##################################
# Problems are only collected unless a test asks for another monitor
os.environ["CONFIGMETA_MONITOR"] = "none"


################################## fixtures ##################################

pytest_plugins = [
    f"{__package__}.fixtures.monitor",
    f"{__package__}.fixtures.sentinel",
]
