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

from typing import Dict


class CatalogTableStatistics:
    """Basic statistics of a table or partition. -1 marks a counter as unknown."""

    UNKNOWN_VALUE = -1
    UNKNOWN: 'CatalogTableStatistics' = None

    def __init__(self, row_count: int = UNKNOWN_VALUE, file_count: int = UNKNOWN_VALUE,
                 total_size: int = UNKNOWN_VALUE, raw_data_size: int = UNKNOWN_VALUE):
        for name, value in (("row_count", row_count), ("file_count", file_count),
                            ("total_size", total_size), ("raw_data_size", raw_data_size)):
            if value is None or value < self.UNKNOWN_VALUE:
                raise ValueError("{} must be non-negative or {}, got {}".format(name, self.UNKNOWN_VALUE, value))
        self.row_count = row_count
        self.file_count = file_count
        self.total_size = total_size
        self.raw_data_size = raw_data_size

    def as_dict(self) -> Dict[str, int]:
        return {
            "row_count": self.row_count,
            "file_count": self.file_count,
            "total_size": self.total_size,
            "raw_data_size": self.raw_data_size,
        }

    def is_unknown(self) -> bool:
        return all(value == self.UNKNOWN_VALUE for value in self.as_dict().values())

    def copy(self) -> 'CatalogTableStatistics':
        return CatalogTableStatistics(self.row_count, self.file_count, self.total_size, self.raw_data_size)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CatalogTableStatistics):
            return False
        return self.as_dict() == other.as_dict()

    def __repr__(self) -> str:
        return ("CatalogTableStatistics(row_count={}, file_count={}, total_size={}, raw_data_size={})"
                .format(self.row_count, self.file_count, self.total_size, self.raw_data_size))


CatalogTableStatistics.UNKNOWN = CatalogTableStatistics()
