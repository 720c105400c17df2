#  Licensed to the Apache Software Foundation (ASF) under one
#  or more contributor license agreements.  See the NOTICE file
#  distributed with this work for additional information
#  regarding copyright ownership.  The ASF licenses this file
#  to you under the Apache License, Version 2.0 (the
#  "License"); you may not use this file except in compliance
#  with the License.  You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
#  Unless required by applicable law or agreed to in writing,
#  software distributed under the License is distributed on an
#  "AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY
#  KIND, either express or implied.  See the License for the
#  specific language governing permissions and limitations
#  under the License.

from dataclasses import dataclass
from typing import Dict, List, Optional

from pyhivecatalog.common.json_util import JSON, json_field

MANAGED_TABLE = "MANAGED_TABLE"
JAVA_FUNCTION = "JAVA"
DEFAULT_PARTITION_NAME = "__HIVE_DEFAULT_PARTITION__"


@dataclass
class FieldSchema:
    name: str = json_field("name", default=None)
    type: str = json_field("type", default=None)
    comment: Optional[str] = json_field("comment", default=None)


@dataclass
class SerDeInfo:
    serialization_lib: Optional[str] = json_field("serializationLib", default=None)
    parameters: Dict[str, str] = json_field("parameters", default_factory=dict)


@dataclass
class StorageDescriptor:
    cols: List[FieldSchema] = json_field("cols", default_factory=list)
    location: Optional[str] = json_field("location", default=None)
    input_format: Optional[str] = json_field("inputFormat", default=None)
    output_format: Optional[str] = json_field("outputFormat", default=None)
    serde_info: SerDeInfo = json_field("serdeInfo", default_factory=SerDeInfo)


@dataclass
class PrimaryKeyConstraint:
    name: str = json_field("name", default=None)
    columns: List[str] = json_field("columns", default_factory=list)


@dataclass
class NotNullConstraint:
    name: str = json_field("name", default=None)
    column: str = json_field("column", default=None)


@dataclass
class HiveDatabase:
    name: str = json_field("name", default=None)
    description: Optional[str] = json_field("description", default=None)
    location_uri: Optional[str] = json_field("locationUri", default=None)
    owner_name: Optional[str] = json_field("ownerName", default=None)
    parameters: Dict[str, str] = json_field("parameters", default_factory=dict)


@dataclass
class HiveTable:
    db_name: str = json_field("dbName", default=None)
    table_name: str = json_field("tableName", default=None)
    table_type: str = json_field("tableType", default=MANAGED_TABLE)
    sd: StorageDescriptor = json_field("sd", default_factory=StorageDescriptor)
    partition_keys: List[FieldSchema] = json_field("partitionKeys", default_factory=list)
    parameters: Dict[str, str] = json_field("parameters", default_factory=dict)
    primary_key: Optional[PrimaryKeyConstraint] = json_field("primaryKey", default=None)
    not_null_constraints: List[NotNullConstraint] = json_field("notNullConstraints", default_factory=list)
    owner: Optional[str] = json_field("owner", default=None)
    create_time: int = json_field("createTime", default=0)


@dataclass
class HivePartition:
    db_name: str = json_field("dbName", default=None)
    table_name: str = json_field("tableName", default=None)
    values: List[str] = json_field("values", default_factory=list)
    sd: StorageDescriptor = json_field("sd", default_factory=StorageDescriptor)
    parameters: Dict[str, str] = json_field("parameters", default_factory=dict)
    create_time: int = json_field("createTime", default=0)


@dataclass
class HiveFunction:
    function_name: str = json_field("functionName", default=None)
    db_name: str = json_field("dbName", default=None)
    class_name: str = json_field("className", default=None)
    function_type: str = json_field("functionType", default=JAVA_FUNCTION)
    owner_name: Optional[str] = json_field("ownerName", default=None)
    create_time: int = json_field("createTime", default=0)


# Column statistics records, one per statistics family

@dataclass
class BooleanColumnStatsData:
    num_trues: Optional[int] = json_field("numTrues", default=None)
    num_falses: Optional[int] = json_field("numFalses", default=None)
    num_nulls: Optional[int] = json_field("numNulls", default=None)


@dataclass
class LongColumnStatsData:
    low_value: Optional[int] = json_field("lowValue", default=None)
    high_value: Optional[int] = json_field("highValue", default=None)
    num_nulls: Optional[int] = json_field("numNulls", default=None)
    num_dvs: Optional[int] = json_field("numDVs", default=None)


@dataclass
class DoubleColumnStatsData:
    low_value: Optional[float] = json_field("lowValue", default=None)
    high_value: Optional[float] = json_field("highValue", default=None)
    num_nulls: Optional[int] = json_field("numNulls", default=None)
    num_dvs: Optional[int] = json_field("numDVs", default=None)


@dataclass
class DecimalColumnStatsData:
    """Decimal bounds are kept as their string rendering to stay exact."""
    low_value: Optional[str] = json_field("lowValue", default=None)
    high_value: Optional[str] = json_field("highValue", default=None)
    num_nulls: Optional[int] = json_field("numNulls", default=None)
    num_dvs: Optional[int] = json_field("numDVs", default=None)


@dataclass
class StringColumnStatsData:
    max_col_len: Optional[int] = json_field("maxColLen", default=None)
    avg_col_len: Optional[float] = json_field("avgColLen", default=None)
    num_nulls: Optional[int] = json_field("numNulls", default=None)
    num_dvs: Optional[int] = json_field("numDVs", default=None)


@dataclass
class BinaryColumnStatsData:
    max_col_len: Optional[int] = json_field("maxColLen", default=None)
    avg_col_len: Optional[float] = json_field("avgColLen", default=None)
    num_nulls: Optional[int] = json_field("numNulls", default=None)


@dataclass
class DateColumnStatsData:
    """Date bounds are days since the epoch."""
    low_value: Optional[int] = json_field("lowValue", default=None)
    high_value: Optional[int] = json_field("highValue", default=None)
    num_nulls: Optional[int] = json_field("numNulls", default=None)
    num_dvs: Optional[int] = json_field("numDVs", default=None)


COLUMN_STATS_TYPES = {
    "boolean": BooleanColumnStatsData,
    "long": LongColumnStatsData,
    "double": DoubleColumnStatsData,
    "decimal": DecimalColumnStatsData,
    "string": StringColumnStatsData,
    "binary": BinaryColumnStatsData,
    "date": DateColumnStatsData,
}


@dataclass
class ColumnStatisticsObj:
    col_name: str = json_field("colName", default=None)
    col_type: str = json_field("colType", default=None)
    stats_data: object = json_field("statsData", default=None)

    def stats_kind(self) -> str:
        for kind, clazz in COLUMN_STATS_TYPES.items():
            if isinstance(self.stats_data, clazz):
                return kind
        raise ValueError("Unknown column statistics record {}".format(type(self.stats_data).__name__))

    def to_dict(self) -> Dict:
        return {
            "colName": self.col_name,
            "colType": self.col_type,
            "statsData": {"type": self.stats_kind(), "data": JSON.to_dict(self.stats_data)},
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "ColumnStatisticsObj":
        stats = data.get("statsData") or {}
        kind = stats.get("type")
        if kind not in COLUMN_STATS_TYPES:
            raise ValueError("Unknown column statistics type {}".format(kind))
        return cls(data.get("colName"), data.get("colType"),
                   JSON.from_dict(stats.get("data") or {}, COLUMN_STATS_TYPES[kind]))


_CHARS_TO_ESCAPE = set(chr(c) for c in range(0x01, 0x20)) | set('"#%\'*/:=?\\\x7f{[]^')


def escape_path_name(value: str) -> str:
    """Escapes a partition value for use in a partition name, as the metastore does."""
    if value is None or value == "":
        return DEFAULT_PARTITION_NAME
    return "".join("%{:02X}".format(ord(c)) if c in _CHARS_TO_ESCAPE else c for c in value)


def make_partition_name(keys: List[str], values: List[str]) -> str:
    if len(keys) != len(values):
        raise ValueError("Partition keys {} do not match values {}".format(keys, values))
    return "/".join("{}={}".format(escape_path_name(k), escape_path_name(v)) for k, v in zip(keys, values))
