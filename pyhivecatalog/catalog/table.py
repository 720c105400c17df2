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

from typing import Dict, List, Optional

import pyarrow as pa

from pyhivecatalog.schema.data_types import DataField, PyarrowFieldParser


class UniqueConstraint:
    """A named primary key over one or more columns."""

    def __init__(self, name: str, columns: List[str]):
        if not name or not name.strip():
            raise ValueError("Constraint name cannot be empty")
        if not columns:
            raise ValueError("Primary key {} must reference at least one column".format(name))
        if len(set(columns)) != len(columns):
            raise ValueError("Primary key {} references duplicate columns {}".format(name, columns))
        self.name = name
        self.columns = list(columns)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UniqueConstraint):
            return False
        return self.name == other.name and self.columns == other.columns

    def __repr__(self) -> str:
        return f"UniqueConstraint(name={self.name!r}, columns={self.columns!r})"


class CatalogTable:
    """
    Engine-neutral description of a table: ordered columns, an optional primary key,
    partition keys drawn from the columns, user properties and a comment.

    A generic table is owned by the catalog alone; its whole schema is kept in metastore
    parameters instead of the metastore's own column model.
    """

    DEFAULT_STORAGE_FORMAT = "TEXTFILE"

    def __init__(self,
                 columns: List[DataField],
                 partition_keys: Optional[List[str]] = None,
                 primary_key: Optional[UniqueConstraint] = None,
                 properties: Optional[Dict[str, str]] = None,
                 comment: Optional[str] = None,
                 generic: bool = False,
                 storage_format: Optional[str] = None,
                 location: Optional[str] = None):
        self.columns = list(columns or [])
        self.partition_keys = list(partition_keys or [])
        self.primary_key = primary_key
        self.properties = dict(properties or {})
        self.comment = comment
        self.generic = generic
        self.storage_format = (storage_format or self.DEFAULT_STORAGE_FORMAT).upper()
        self.location = location
        self._validate()

    def _validate(self):
        names = self.column_names()
        if len(set(names)) != len(names):
            raise ValueError("Duplicate column names in {}".format(names))
        by_name = {field.name: field for field in self.columns}

        if self.primary_key is not None:
            for column in self.primary_key.columns:
                if column not in by_name:
                    raise ValueError("Primary key column {} does not exist".format(column))
                if by_name[column].type.nullable:
                    raise ValueError("Primary key column {} must be NOT NULL".format(column))

        if len(set(self.partition_keys)) != len(self.partition_keys):
            raise ValueError("Duplicate partition keys in {}".format(self.partition_keys))
        for key in self.partition_keys:
            if key not in by_name:
                raise ValueError("Partition key {} does not exist".format(key))
        ordered = [name for name in names if name in self.partition_keys]
        if ordered != self.partition_keys:
            raise ValueError(
                "Partition keys {} must follow the column order {}".format(self.partition_keys, ordered))

    def column_names(self) -> List[str]:
        return [field.name for field in self.columns]

    def get_column(self, name: str) -> Optional[DataField]:
        for field in self.columns:
            if field.name == name:
                return field
        return None

    def data_columns(self) -> List[DataField]:
        return [field for field in self.columns if field.name not in self.partition_keys]

    def is_partitioned(self) -> bool:
        return len(self.partition_keys) > 0

    def copy(self, properties: Optional[Dict[str, str]] = None) -> 'CatalogTable':
        return CatalogTable(list(self.columns), list(self.partition_keys), self.primary_key,
                            dict(self.properties) if properties is None else properties,
                            self.comment, self.generic, self.storage_format, self.location)

    @staticmethod
    def from_pyarrow_schema(pa_schema: pa.Schema, partition_keys: Optional[List[str]] = None,
                            primary_key: Optional[UniqueConstraint] = None, properties: Optional[Dict] = None,
                            comment: Optional[str] = None, generic: bool = False) -> 'CatalogTable':
        fields = PyarrowFieldParser.to_catalog_schema(pa_schema)
        if primary_key is not None:
            # primary key columns are implicitly NOT NULL
            fields = [field.copy(field.type.copy(False)) if field.name in primary_key.columns else field
                      for field in fields]
        return CatalogTable(fields, partition_keys, primary_key, properties, comment, generic)

    def to_pyarrow_schema(self) -> pa.Schema:
        return PyarrowFieldParser.from_catalog_schema(self.columns)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CatalogTable):
            return False
        return (self.columns == other.columns and
                self.partition_keys == other.partition_keys and
                self.primary_key == other.primary_key and
                self.properties == other.properties and
                self.comment == other.comment and
                self.generic == other.generic and
                self.storage_format == other.storage_format and
                self.location == other.location)

    def __repr__(self) -> str:
        return (f"CatalogTable(columns={self.columns!r}, partition_keys={self.partition_keys!r}, "
                f"primary_key={self.primary_key!r}, properties={self.properties!r}, "
                f"comment={self.comment!r}, generic={self.generic}, "
                f"storage_format={self.storage_format!r}, location={self.location!r})")
