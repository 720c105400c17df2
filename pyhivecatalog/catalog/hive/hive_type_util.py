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

import re
from typing import List, Optional, Tuple

from pyhivecatalog.catalog.catalog_exception import \
    UnsupportedDataTypeException
from pyhivecatalog.schema.data_types import (ArrayType, AtomicType, DataField,
                                             DataType, MapType, RowType)

MAX_CHAR_LENGTH = 255
MAX_VARCHAR_LENGTH = 65535
MAX_DECIMAL_PRECISION = 38
DEFAULT_DECIMAL = (10, 0)
# the metastore timestamp has nanosecond precision
TIMESTAMP_PRECISION = 9

_SIMPLE_TO_HIVE = {
    "BOOLEAN": "boolean",
    "TINYINT": "tinyint",
    "SMALLINT": "smallint",
    "INT": "int",
    "INTEGER": "int",
    "BIGINT": "bigint",
    "FLOAT": "float",
    "DOUBLE": "double",
    "STRING": "string",
    "DATE": "date",
    "BYTES": "binary",
}

_SIMPLE_FROM_HIVE = {
    "boolean": "BOOLEAN",
    "tinyint": "TINYINT",
    "smallint": "SMALLINT",
    "int": "INT",
    "integer": "INT",
    "bigint": "BIGINT",
    "float": "FLOAT",
    "double": "DOUBLE",
    "string": "STRING",
    "date": "DATE",
    "binary": "BYTES",
    "timestamp": "TIMESTAMP({})".format(TIMESTAMP_PRECISION),
}

_PARAMS = re.compile(r"^\w+\s*\(\s*(\d+)\s*(?:,\s*(\d+)\s*)?\)$")


def _type_params(type_string: str) -> Tuple[Optional[int], Optional[int]]:
    match = _PARAMS.match(type_string.strip())
    if match is None:
        return None, None
    first = int(match.group(1))
    second = int(match.group(2)) if match.group(2) is not None else None
    return first, second


def type_root(data_type: DataType) -> str:
    """Root keyword of a type: ARRAY, MAP, ROW or the atomic keyword without parameters."""
    if isinstance(data_type, AtomicType):
        root = data_type.type_root()
        return {"INTEGER": "INT", "NUMERIC": "DECIMAL", "DEC": "DECIMAL"}.get(root, root)
    if isinstance(data_type, ArrayType):
        return "ARRAY"
    if isinstance(data_type, MapType):
        return "MAP"
    return "ROW"


def to_hive_type(data_type: DataType) -> str:
    """
    Lowers a logical type to the metastore type grammar.

    Nullability is not part of the metastore grammar and is not carried;
    NOT NULL on top level columns is kept as constraint records by the codec.
    """
    if isinstance(data_type, ArrayType):
        return "array<{}>".format(to_hive_type(data_type.element))
    if isinstance(data_type, MapType):
        return "map<{},{}>".format(to_hive_type(data_type.key), to_hive_type(data_type.value))
    if isinstance(data_type, RowType):
        if not data_type.fields:
            raise UnsupportedDataTypeException(data_type, "a struct needs at least one field")
        return "struct<{}>".format(",".join(
            "{}:{}".format(field.name, to_hive_type(field.type)) for field in data_type.fields))

    root = type_root(data_type)
    if root in _SIMPLE_TO_HIVE:
        return _SIMPLE_TO_HIVE[root]
    first, second = _type_params(data_type.type)
    if root == "CHAR":
        length = first if first is not None else 1
        if not 1 <= length <= MAX_CHAR_LENGTH:
            raise UnsupportedDataTypeException(data_type, "char length must be in [1, {}]".format(MAX_CHAR_LENGTH))
        return "char({})".format(length)
    if root == "VARCHAR":
        length = first if first is not None else 1
        if not 1 <= length <= MAX_VARCHAR_LENGTH:
            raise UnsupportedDataTypeException(
                data_type, "varchar length must be in [1, {}]".format(MAX_VARCHAR_LENGTH))
        return "varchar({})".format(length)
    if root == "DECIMAL":
        precision = first if first is not None else DEFAULT_DECIMAL[0]
        scale = second if second is not None else (0 if first is not None else DEFAULT_DECIMAL[1])
        if precision > MAX_DECIMAL_PRECISION:
            raise UnsupportedDataTypeException(
                data_type, "decimal precision must not exceed {}".format(MAX_DECIMAL_PRECISION))
        return "decimal({},{})".format(precision, scale)
    if root == "TIMESTAMP":
        if first != TIMESTAMP_PRECISION:
            raise UnsupportedDataTypeException(
                data_type, "only TIMESTAMP({}) can be stored".format(TIMESTAMP_PRECISION))
        return "timestamp"
    raise UnsupportedDataTypeException(data_type)


class _HiveTypeParser:
    """Recursive descent parser of the metastore type grammar."""

    _TOKEN = re.compile(r"\s*([A-Za-z_][A-Za-z0-9_ ]*?(?=\s*[<>(),:]|\s*$)|\d+|[<>(),:])")

    def __init__(self, type_string: str):
        self.type_string = type_string
        self.tokens = self._tokenize(type_string)
        self.index = 0

    def _tokenize(self, type_string: str) -> List[str]:
        tokens = []
        position = 0
        while position < len(type_string):
            if type_string[position].isspace():
                position += 1
                continue
            match = self._TOKEN.match(type_string, position)
            if match is None:
                raise ValueError("Cannot parse metastore type {!r} at {}".format(type_string, position))
            tokens.append(match.group(1).strip())
            position = match.end()
        return tokens

    def parse(self) -> DataType:
        data_type = self._parse_type()
        if self.index != len(self.tokens):
            raise ValueError("Unexpected trailing input in metastore type {!r}".format(self.type_string))
        return data_type

    def _next(self) -> str:
        if self.index >= len(self.tokens):
            raise ValueError("Unexpected end of metastore type {!r}".format(self.type_string))
        token = self.tokens[self.index]
        self.index += 1
        return token

    def _peek(self) -> Optional[str]:
        return self.tokens[self.index] if self.index < len(self.tokens) else None

    def _expect(self, token: str):
        actual = self._next()
        if actual != token:
            raise ValueError("Expected {!r} but found {!r} in metastore type {!r}".format(
                token, actual, self.type_string))

    def _parse_params(self) -> List[int]:
        params = []
        if self._peek() != "(":
            return params
        self._next()
        while True:
            token = self._next()
            if not token.isdigit():
                raise ValueError("Expected a number in metastore type {!r}".format(self.type_string))
            params.append(int(token))
            token = self._next()
            if token == ")":
                return params
            if token != ",":
                raise ValueError("Expected ',' or ')' in metastore type {!r}".format(self.type_string))

    def _parse_type(self) -> DataType:
        keyword = " ".join(self._next().lower().split())
        if keyword == "array":
            self._expect("<")
            element = self._parse_type()
            self._expect(">")
            return ArrayType(True, element)
        if keyword == "map":
            self._expect("<")
            key = self._parse_type()
            self._expect(",")
            value = self._parse_type()
            self._expect(">")
            return MapType(True, key, value)
        if keyword == "struct":
            self._expect("<")
            fields = []
            while True:
                name = self._next()
                self._expect(":")
                fields.append(DataField(name, self._parse_type()))
                token = self._next()
                if token == ">":
                    return RowType(True, fields)
                if token != ",":
                    raise ValueError("Expected ',' or '>' in metastore type {!r}".format(self.type_string))
        if keyword == "double precision":
            keyword = "double"
        if keyword in _SIMPLE_FROM_HIVE:
            return AtomicType(_SIMPLE_FROM_HIVE[keyword])
        params = self._parse_params()
        if keyword == "decimal":
            precision = params[0] if params else DEFAULT_DECIMAL[0]
            scale = params[1] if len(params) > 1 else (0 if params else DEFAULT_DECIMAL[1])
            return AtomicType("DECIMAL({}, {})".format(precision, scale))
        if keyword in ("char", "varchar") and len(params) == 1:
            return AtomicType("{}({})".format(keyword.upper(), params[0]))
        raise ValueError("Unsupported metastore type {!r}".format(self.type_string))


def from_hive_type(type_string: str) -> DataType:
    """Parses a metastore type string; every decoded type is nullable. Raises ValueError when unparsable."""
    if not type_string or not type_string.strip():
        raise ValueError("Empty metastore type")
    return _HiveTypeParser(type_string).parse()
