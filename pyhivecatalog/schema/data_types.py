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

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Union

import pyarrow
from pyarrow import types


class DataType(ABC):
    nullable: bool

    @abstractmethod
    def to_dict(self) -> Union[str, Dict[str, Any]]:
        pass

    @abstractmethod
    def copy(self, nullable: bool) -> "DataType":
        """Returns this type with the given nullability."""

    @abstractmethod
    def __str__(self) -> str:
        pass


@dataclass
class AtomicType(DataType):
    type: str
    nullable: bool

    def __init__(self, type: str, nullable: bool = True):
        self.type = type
        self.nullable = nullable

    def type_root(self) -> str:
        """The keyword of this type without length, precision or scale, e.g. DECIMAL for DECIMAL(10, 2)."""
        return self.type.split("(")[0].strip().upper()

    def copy(self, nullable: bool) -> "AtomicType":
        return AtomicType(self.type, nullable)

    def to_dict(self) -> str:
        if not self.nullable:
            return self.type + " NOT NULL"
        return self.type

    @classmethod
    def from_dict(cls, data: str) -> "AtomicType":
        return DataTypeParser.parse_data_type(data)

    def __str__(self) -> str:
        null_suffix = "" if self.nullable else " NOT NULL"
        return "{}{}".format(self.type, null_suffix)


@dataclass
class ArrayType(DataType):
    element: DataType
    nullable: bool

    def __init__(self, nullable: bool, element_type: DataType):
        self.nullable = nullable
        self.element = element_type

    def copy(self, nullable: bool) -> "ArrayType":
        return ArrayType(nullable, self.element)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "ARRAY" + (" NOT NULL" if not self.nullable else ""),
            "element": self.element.to_dict() if self.element else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ArrayType":
        return DataTypeParser.parse_data_type(data)

    def __str__(self) -> str:
        null_suffix = "" if self.nullable else " NOT NULL"
        return "ARRAY<{}>{}".format(self.element, null_suffix)


@dataclass
class MapType(DataType):
    key: DataType
    value: DataType
    nullable: bool

    def __init__(
            self,
            nullable: bool,
            key_type: DataType,
            value_type: DataType):
        self.nullable = nullable
        self.key = key_type
        self.value = value_type

    def copy(self, nullable: bool) -> "MapType":
        return MapType(nullable, self.key, self.value)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "MAP" + (" NOT NULL" if not self.nullable else ""),
            "key": self.key.to_dict() if self.key else None,
            "value": self.value.to_dict() if self.value else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MapType":
        return DataTypeParser.parse_data_type(data)

    def __str__(self) -> str:
        null_suffix = "" if self.nullable else " NOT NULL"
        return "MAP<{}, {}>{}".format(self.key, self.value, null_suffix)


@dataclass
class DataField:
    """A named, typed column. Nullability is carried by the type."""
    FIELD_NAME = "name"
    FIELD_TYPE = "type"
    FIELD_DESCRIPTION = "description"

    name: str
    type: DataType
    description: Optional[str] = None

    def copy(self, type: Optional[DataType] = None) -> "DataField":
        return DataField(self.name, type if type is not None else self.type, self.description)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DataField":
        return DataTypeParser.parse_data_field(data)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            self.FIELD_NAME: self.name,
            self.FIELD_TYPE: self.type.to_dict() if self.type else None,
        }

        if self.description is not None:
            result[self.FIELD_DESCRIPTION] = self.description

        return result


@dataclass
class RowType(DataType):
    fields: List[DataField]
    nullable: bool

    def __init__(self, nullable: bool, fields: List[DataField]):
        self.nullable = nullable
        self.fields = fields or []

    def copy(self, nullable: bool) -> "RowType":
        return RowType(nullable, self.fields)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "ROW" + ("" if self.nullable else " NOT NULL"),
            "fields": [field.to_dict() for field in self.fields],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RowType":
        return DataTypeParser.parse_data_type(data)

    def __str__(self) -> str:
        field_strs = []
        for field in self.fields:
            description = " COMMENT {}".format(field.description) if field.description else ""
            field_strs.append("{}: {}{}".format(field.name, field.type, description))
        null_suffix = "" if self.nullable else " NOT NULL"
        return "ROW<{}>{}".format(', '.join(field_strs), null_suffix)


class Keyword(Enum):
    CHAR = "CHAR"
    VARCHAR = "VARCHAR"
    STRING = "STRING"
    BOOLEAN = "BOOLEAN"
    BINARY = "BINARY"
    VARBINARY = "VARBINARY"
    BYTES = "BYTES"
    DECIMAL = "DECIMAL"
    NUMERIC = "NUMERIC"
    DEC = "DEC"
    TINYINT = "TINYINT"
    SMALLINT = "SMALLINT"
    INT = "INT"
    INTEGER = "INTEGER"
    BIGINT = "BIGINT"
    FLOAT = "FLOAT"
    DOUBLE = "DOUBLE"
    DATE = "DATE"
    TIME = "TIME"
    TIMESTAMP = "TIMESTAMP"
    TIMESTAMP_LTZ = "TIMESTAMP_LTZ"


class DataTypeParser:

    @staticmethod
    def parse_nullability(type_string: str) -> bool:
        return "NOT NULL" not in type_string.upper()

    @staticmethod
    def parse_atomic_type_sql_string(type_string: str) -> DataType:
        nullable = DataTypeParser.parse_nullability(type_string)
        type_upper = re.sub(r"\s+NOT\s+NULL\s*$|\s+NULL\s*$", "", type_string.upper().strip())

        if "(" in type_upper:
            base_type = type_upper.split("(")[0].strip()
        else:
            base_type = type_upper

        try:
            Keyword(base_type)
        except ValueError:
            raise ValueError("Unknown type: {}".format(base_type))
        return AtomicType(type_upper, nullable)

    @staticmethod
    def parse_data_type(json_data: Union[Dict[str, Any], str]) -> DataType:
        if isinstance(json_data, str):
            return DataTypeParser.parse_atomic_type_sql_string(json_data)

        if isinstance(json_data, dict):
            if "type" not in json_data:
                raise ValueError("Missing 'type' field in JSON: {}".format(json_data))

            type_string = json_data["type"]
            nullable = DataTypeParser.parse_nullability(type_string)

            if type_string.startswith("ARRAY"):
                return ArrayType(nullable, DataTypeParser.parse_data_type(json_data.get("element")))

            elif type_string.startswith("MAP"):
                key = DataTypeParser.parse_data_type(json_data.get("key"))
                value = DataTypeParser.parse_data_type(json_data.get("value"))
                return MapType(nullable, key, value)

            elif type_string.startswith("ROW"):
                fields = [DataTypeParser.parse_data_field(field_json)
                          for field_json in json_data.get("fields", [])]
                return RowType(nullable, fields)

            else:
                return DataTypeParser.parse_atomic_type_sql_string(type_string)

        raise ValueError("Cannot parse data type: {}".format(json_data))

    @staticmethod
    def parse_data_field(json_data: Dict[str, Any]) -> DataField:
        if DataField.FIELD_NAME not in json_data:
            raise ValueError("Missing 'name' field in JSON")
        if DataField.FIELD_TYPE not in json_data:
            raise ValueError("Missing 'type' field in JSON")

        return DataField(
            name=json_data[DataField.FIELD_NAME],
            type=DataTypeParser.parse_data_type(json_data[DataField.FIELD_TYPE]),
            description=json_data.get(DataField.FIELD_DESCRIPTION),
        )


class PyarrowFieldParser:

    @staticmethod
    def from_catalog_type(data_type: DataType) -> pyarrow.DataType:
        if isinstance(data_type, AtomicType):
            type_name = data_type.type.upper()
            root = data_type.type_root()
            if root == 'TINYINT':
                return pyarrow.int8()
            elif root == 'SMALLINT':
                return pyarrow.int16()
            elif root in ('INT', 'INTEGER'):
                return pyarrow.int32()
            elif root == 'BIGINT':
                return pyarrow.int64()
            elif root == 'FLOAT':
                return pyarrow.float32()
            elif root == 'DOUBLE':
                return pyarrow.float64()
            elif root == 'BOOLEAN':
                return pyarrow.bool_()
            elif root in ('STRING', 'CHAR', 'VARCHAR'):
                return pyarrow.string()
            elif root in ('BYTES', 'VARBINARY'):
                return pyarrow.binary()
            elif root == 'BINARY':
                match = re.fullmatch(r'BINARY\((\d+)\)', type_name)
                return pyarrow.binary(int(match.group(1)) if match else 1)
            elif root in ('DECIMAL', 'NUMERIC', 'DEC'):
                match_ps = re.fullmatch(r'\w+\((\d+),\s*(\d+)\)', type_name)
                if match_ps:
                    precision, scale = map(int, match_ps.groups())
                    return pyarrow.decimal128(precision, scale)
                match_p = re.fullmatch(r'\w+\((\d+)\)', type_name)
                if match_p:
                    return pyarrow.decimal128(int(match_p.group(1)), 0)
                return pyarrow.decimal128(10, 0)
            elif root == 'TIMESTAMP':
                match = re.fullmatch(r'TIMESTAMP\((\d+)\)', type_name)
                precision = int(match.group(1)) if match else 6
                if precision == 0:
                    return pyarrow.timestamp('s', tz=None)
                elif precision <= 3:
                    return pyarrow.timestamp('ms', tz=None)
                elif precision <= 6:
                    return pyarrow.timestamp('us', tz=None)
                return pyarrow.timestamp('ns', tz=None)
            elif root == 'DATE':
                return pyarrow.date32()
        elif isinstance(data_type, ArrayType):
            return pyarrow.list_(PyarrowFieldParser.from_catalog_type(data_type.element))
        elif isinstance(data_type, MapType):
            key_type = PyarrowFieldParser.from_catalog_type(data_type.key)
            value_type = PyarrowFieldParser.from_catalog_type(data_type.value)
            return pyarrow.map_(key_type, value_type)
        elif isinstance(data_type, RowType):
            return pyarrow.struct([PyarrowFieldParser.from_catalog_field(field) for field in data_type.fields])
        raise ValueError("Unsupported data type: {}".format(data_type))

    @staticmethod
    def from_catalog_field(data_field: DataField) -> pyarrow.Field:
        pa_field_type = PyarrowFieldParser.from_catalog_type(data_field.type)
        metadata = {}
        if data_field.description:
            metadata[b'description'] = data_field.description.encode('utf-8')
        return pyarrow.field(data_field.name, pa_field_type, nullable=data_field.type.nullable,
                             metadata=metadata or None)

    @staticmethod
    def from_catalog_schema(data_fields: List[DataField]) -> pyarrow.Schema:
        return pyarrow.schema([PyarrowFieldParser.from_catalog_field(field) for field in data_fields])

    @staticmethod
    def to_catalog_type(pa_type: pyarrow.DataType, nullable: bool) -> DataType:
        # Only lossless mappings; anything else is rejected
        type_name = None
        if types.is_int8(pa_type):
            type_name = 'TINYINT'
        elif types.is_int16(pa_type):
            type_name = 'SMALLINT'
        elif types.is_int32(pa_type):
            type_name = 'INT'
        elif types.is_int64(pa_type):
            type_name = 'BIGINT'
        elif types.is_float32(pa_type):
            type_name = 'FLOAT'
        elif types.is_float64(pa_type):
            type_name = 'DOUBLE'
        elif types.is_boolean(pa_type):
            type_name = 'BOOLEAN'
        elif types.is_string(pa_type) or types.is_large_string(pa_type):
            type_name = 'STRING'
        elif types.is_fixed_size_binary(pa_type):
            type_name = f'BINARY({pa_type.byte_width})'
        elif types.is_binary(pa_type) or types.is_large_binary(pa_type):
            type_name = 'BYTES'
        elif types.is_decimal(pa_type):
            type_name = f'DECIMAL({pa_type.precision}, {pa_type.scale})'
        elif types.is_timestamp(pa_type) and pa_type.tz is None:
            precision_mapping = {'s': 0, 'ms': 3, 'us': 6, 'ns': 9}
            type_name = f'TIMESTAMP({precision_mapping[pa_type.unit]})'
        elif types.is_date32(pa_type):
            type_name = 'DATE'
        elif types.is_list(pa_type) or types.is_large_list(pa_type):
            element_type = PyarrowFieldParser.to_catalog_type(pa_type.value_type, pa_type.value_field.nullable)
            return ArrayType(nullable, element_type)
        elif types.is_map(pa_type):
            key_type = PyarrowFieldParser.to_catalog_type(pa_type.key_type, False)
            value_type = PyarrowFieldParser.to_catalog_type(pa_type.item_type, pa_type.item_field.nullable)
            return MapType(nullable, key_type, value_type)
        elif types.is_struct(pa_type):
            return RowType(nullable, [PyarrowFieldParser.to_catalog_field(pa_type.field(i))
                                      for i in range(pa_type.num_fields)])
        if type_name is not None:
            return AtomicType(type_name, nullable)
        raise ValueError("Unsupported pyarrow type: {}".format(pa_type))

    @staticmethod
    def to_catalog_field(pa_field: pyarrow.Field) -> DataField:
        data_type = PyarrowFieldParser.to_catalog_type(pa_field.type, pa_field.nullable)
        description = pa_field.metadata.get(b'description', b'').decode('utf-8') \
            if pa_field.metadata and b'description' in pa_field.metadata else None
        return DataField(name=pa_field.name, type=data_type, description=description)

    @staticmethod
    def to_catalog_schema(pa_schema: pyarrow.Schema) -> List[DataField]:
        return [PyarrowFieldParser.to_catalog_field(pa_field) for pa_field in pa_schema]
