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

import logging
from typing import Dict, Optional

from pyhivecatalog.catalog.hive.hive_shim import STATS_GENERATED, HiveShim
from pyhivecatalog.catalog.stats.table_statistics import CatalogTableStatistics

logger = logging.getLogger(__name__)

ROW_COUNT = "numRows"
FILE_COUNT = "numFiles"
TOTAL_SIZE = "totalSize"
RAW_DATA_SIZE = "rawDataSize"

STATS_KEYS = (ROW_COUNT, FILE_COUNT, TOTAL_SIZE, RAW_DATA_SIZE)


def _parse_counter(value: Optional[str]) -> int:
    if value is None:
        return CatalogTableStatistics.UNKNOWN_VALUE
    try:
        parsed = int(value.strip())
    except ValueError:
        return CatalogTableStatistics.UNKNOWN_VALUE
    return parsed if parsed >= 0 else CatalogTableStatistics.UNKNOWN_VALUE


def _counters(statistics: CatalogTableStatistics) -> Dict[str, int]:
    return {
        ROW_COUNT: statistics.row_count,
        FILE_COUNT: statistics.file_count,
        TOTAL_SIZE: statistics.total_size,
        RAW_DATA_SIZE: statistics.raw_data_size,
    }


def is_zero_without_marker(parameters: Dict[str, str]) -> bool:
    """True when the counters present are all zero and nothing marks them as gathered."""
    present = [parameters[key] for key in STATS_KEYS if key in parameters]
    if not present or HiveShim.has_basic_stats_marker(parameters):
        return False
    return all(_parse_counter(value) == 0 for value in present)


def clean_on_create(parameters: Dict[str, str]) -> Dict[str, str]:
    """Drops zero counters a metastore would otherwise report as real statistics of an empty table."""
    if not is_zero_without_marker(parameters):
        return dict(parameters)
    logger.debug("Removing zero statistics without %s", STATS_GENERATED)
    return {key: value for key, value in parameters.items() if key not in STATS_KEYS}


def to_table_statistics(parameters: Dict[str, str]) -> CatalogTableStatistics:
    if is_zero_without_marker(parameters):
        return CatalogTableStatistics.UNKNOWN
    return CatalogTableStatistics(
        _parse_counter(parameters.get(ROW_COUNT)),
        _parse_counter(parameters.get(FILE_COUNT)),
        _parse_counter(parameters.get(TOTAL_SIZE)),
        _parse_counter(parameters.get(RAW_DATA_SIZE)))


def update_statistics(parameters: Dict[str, str], statistics: CatalogTableStatistics, shim: HiveShim) -> bool:
    """
    Writes ``statistics`` into ``parameters`` in place and returns whether anything changed.

    Known counters are written, unknown ones removed. The gathered marker is set while
    any counter is known and removed once none is.
    """
    changed = False
    for key, value in _counters(statistics).items():
        if value == CatalogTableStatistics.UNKNOWN_VALUE:
            if key in parameters:
                del parameters[key]
                changed = True
        elif parameters.get(key) != str(value):
            parameters[key] = str(value)
            changed = True

    if statistics.is_unknown():
        if STATS_GENERATED in parameters:
            del parameters[STATS_GENERATED]
            changed = True
    elif not HiveShim.has_basic_stats_marker(parameters):
        parameters[STATS_GENERATED] = shim.basic_stats_marker_value()
        changed = True
    return changed
