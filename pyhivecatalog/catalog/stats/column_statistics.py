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

import datetime
from abc import ABC
from typing import Dict, Optional


def _check_count(name: str, value: Optional[int]):
    if value is not None and value < 0:
        raise ValueError("{} must be non-negative, got {}".format(name, value))


class CatalogColumnStatisticsData(ABC):
    """Statistics of a single column. None marks a value as unknown."""

    # fields compared by __eq__ and checked to be non-negative
    _COUNTS = ()
    _VALUES = ()

    def __init__(self, null_count: Optional[int] = None):
        self.null_count = null_count

    def _validate(self):
        for name in self._COUNTS:
            _check_count(name, getattr(self, name))

    def _fields(self):
        return tuple(getattr(self, name) for name in self._VALUES + self._COUNTS)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return False
        return self._fields() == other._fields()

    def __repr__(self) -> str:
        body = ", ".join("{}={!r}".format(name, getattr(self, name)) for name in self._VALUES + self._COUNTS)
        return "{}({})".format(self.__class__.__name__, body)


class CatalogColumnStatisticsDataBoolean(CatalogColumnStatisticsData):
    _COUNTS = ("true_count", "false_count", "null_count")

    def __init__(self, true_count: Optional[int] = None, false_count: Optional[int] = None,
                 null_count: Optional[int] = None):
        super().__init__(null_count)
        self.true_count = true_count
        self.false_count = false_count
        self._validate()


class CatalogColumnStatisticsDataLong(CatalogColumnStatisticsData):
    _VALUES = ("min", "max")
    _COUNTS = ("null_count", "ndv")

    def __init__(self, min: Optional[int] = None, max: Optional[int] = None, null_count: Optional[int] = None,
                 ndv: Optional[int] = None):
        super().__init__(null_count)
        self.min = min
        self.max = max
        self.ndv = ndv
        self._validate()


class CatalogColumnStatisticsDataDouble(CatalogColumnStatisticsData):
    _VALUES = ("min", "max")
    _COUNTS = ("null_count", "ndv")

    def __init__(self, min: Optional[float] = None, max: Optional[float] = None, null_count: Optional[int] = None,
                 ndv: Optional[int] = None):
        super().__init__(null_count)
        self.min = min
        self.max = max
        self.ndv = ndv
        self._validate()


class CatalogColumnStatisticsDataString(CatalogColumnStatisticsData):
    _COUNTS = ("max_length", "null_count", "ndv")
    _VALUES = ("avg_length",)

    def __init__(self, max_length: Optional[int] = None, avg_length: Optional[float] = None,
                 null_count: Optional[int] = None, ndv: Optional[int] = None):
        super().__init__(null_count)
        self.max_length = max_length
        self.avg_length = avg_length
        self.ndv = ndv
        self._validate()
        if avg_length is not None and avg_length < 0:
            raise ValueError("avg_length must be non-negative, got {}".format(avg_length))


class CatalogColumnStatisticsDataBinary(CatalogColumnStatisticsData):
    _COUNTS = ("max_length", "null_count")
    _VALUES = ("avg_length",)

    def __init__(self, max_length: Optional[int] = None, avg_length: Optional[float] = None,
                 null_count: Optional[int] = None):
        super().__init__(null_count)
        self.max_length = max_length
        self.avg_length = avg_length
        self._validate()
        if avg_length is not None and avg_length < 0:
            raise ValueError("avg_length must be non-negative, got {}".format(avg_length))


class CatalogColumnStatisticsDataDate(CatalogColumnStatisticsData):
    _VALUES = ("min", "max")
    _COUNTS = ("null_count", "ndv")

    def __init__(self, min: Optional[datetime.date] = None, max: Optional[datetime.date] = None,
                 null_count: Optional[int] = None, ndv: Optional[int] = None):
        super().__init__(null_count)
        self.min = min
        self.max = max
        self.ndv = ndv
        self._validate()


class CatalogColumnStatistics:
    """Column statistics of a table or partition, keyed by column name."""

    def __init__(self, column_statistics_data: Optional[Dict[str, CatalogColumnStatisticsData]] = None):
        self.column_statistics_data = dict(column_statistics_data or {})

    def get_column_statistics_data(self) -> Dict[str, CatalogColumnStatisticsData]:
        return dict(self.column_statistics_data)

    def is_empty(self) -> bool:
        return not self.column_statistics_data

    def copy(self) -> 'CatalogColumnStatistics':
        return CatalogColumnStatistics(self.column_statistics_data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CatalogColumnStatistics):
            return False
        return self.column_statistics_data == other.column_statistics_data

    def __repr__(self) -> str:
        return "CatalogColumnStatistics({!r})".format(self.column_statistics_data)
