################################################################################
#  Licensed to the Apache Software Foundation (ASF) under one
#  or more contributor license agreements.  See the NOTICE file
#  distributed with this work for additional information
#  regarding copyright ownership.  The ASF licenses this file
#  to you under the Apache License, Version 2.0 (the
#  "License"); you may not use this file except in compliance
#  with the License.  You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
# limitations under the License.
################################################################################

import json
import logging
import re
import threading
from enum import Enum
from typing import Dict, Optional

from packaging.version import Version

from pyhivecatalog.catalog.catalog_exception import VersionDetectionException

logger = logging.getLogger(__name__)


class Capability(Enum):
    """Optional metastore features, each available from a minimum version."""
    DATE_COLUMN_STATISTICS = "1.2.0"
    # primary key and NOT NULL constraint records
    TABLE_CONSTRAINTS = "3.1.0"

    @property
    def min_version(self) -> Version:
        return Version(self.value)


KNOWN_VERSIONS = [Version(v) for v in (
    "1.0.0", "1.0.1", "1.1.0", "1.1.1", "1.2.0", "1.2.1", "1.2.2",
    "2.0.0", "2.0.1", "2.1.0", "2.1.1", "2.2.0",
    "2.3.0", "2.3.1", "2.3.2", "2.3.3", "2.3.4", "2.3.5", "2.3.6", "2.3.7", "2.3.8", "2.3.9",
    "3.1.0", "3.1.1", "3.1.2", "3.1.3",
)]

_VERSION_PATTERN = re.compile(r"^\s*v?(\d+)\.(\d+)(?:\.(\d+))?")

STATS_GENERATED = "COLUMN_STATS_ACCURATE"
BASIC_STATS = "BASIC_STATS"


def parse_version(version: str) -> Version:
    """Reduces a reported version such as ``2.1.1-cdh6.3.2`` to its numeric ``major.minor.patch`` prefix."""
    match = _VERSION_PATTERN.match(version or "")
    if match is None:
        raise VersionDetectionException(version, "no numeric major.minor prefix")
    major, minor, patch = match.group(1), match.group(2), match.group(3) or "0"
    return Version("{}.{}.{}".format(major, minor, patch))


class HiveShim:
    """
    Capabilities of one metastore version.

    ``feature_version`` is the known version whose feature set applies: the
    greatest known version not newer than the reported one, or None when the
    reported version predates every known one.
    """

    def __init__(self, version: Version, feature_version: Optional[Version]):
        self.version = version
        self.feature_version = feature_version

    def get_version(self) -> str:
        return str(self.version)

    def supports(self, capability: Capability) -> bool:
        return self.feature_version is not None and self.feature_version >= capability.min_version

    def basic_stats_marker_value(self) -> str:
        """Value written under COLUMN_STATS_ACCURATE when basic statistics are set."""
        if self.version.major < 2:
            return "true"
        return json.dumps({BASIC_STATS: "true"}, separators=(",", ":"))

    @staticmethod
    def has_basic_stats_marker(parameters: Dict[str, str]) -> bool:
        value = parameters.get(STATS_GENERATED)
        if value is None:
            return False
        if value.strip().lower() == "true":
            return True
        try:
            parsed = json.loads(value)
        except ValueError:
            return False
        return isinstance(parsed, dict) and str(parsed.get(BASIC_STATS, "")).lower() == "true"

    def __repr__(self) -> str:
        return "HiveShim(version={}, feature_version={})".format(self.version, self.feature_version)


class HiveShimLoader:
    """Hands out one shim per metastore version."""

    _shims: Dict[Version, HiveShim] = {}
    _lock = threading.Lock()

    @classmethod
    def load(cls, version: str) -> HiveShim:
        parsed = parse_version(version)
        with cls._lock:
            shim = cls._shims.get(parsed)
            if shim is None:
                shim = HiveShim(parsed, cls._feature_version(parsed))
                cls._shims[parsed] = shim
                if parsed not in KNOWN_VERSIONS:
                    logger.info("Hive version %s is not a known version, using feature set of %s",
                                parsed, shim.feature_version)
            return shim

    @staticmethod
    def _feature_version(version: Version) -> Optional[Version]:
        candidates = [known for known in KNOWN_VERSIONS if known <= version]
        return candidates[-1] if candidates else None
