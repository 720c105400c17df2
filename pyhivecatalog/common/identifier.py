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
from dataclasses import dataclass
from typing import Optional

from pyhivecatalog.common.json_util import json_field


@dataclass
class Identifier:
    """Path of a catalog object: an optional catalog name, a database name and an object name."""

    database: str = json_field("database", default=None)
    object: str = json_field("object", default=None)
    catalog: Optional[str] = json_field("catalog", default=None)

    def __post_init__(self):
        if not self.database or not self.database.strip():
            raise ValueError("Database name cannot be empty")
        if not self.object or not self.object.strip():
            raise ValueError("Object name cannot be empty")

    @classmethod
    def create(cls, database: str, object: str) -> "Identifier":
        return cls(database, object)

    @classmethod
    def from_string(cls, full_name: str) -> "Identifier":
        parts = full_name.split(".")
        if len(parts) == 2:
            return cls(parts[0], parts[1])
        elif len(parts) == 3:
            return cls(parts[1], parts[2], parts[0])
        else:
            raise ValueError("Invalid identifier format: {}".format(full_name))

    def get_full_name(self) -> str:
        if self.catalog:
            return "{}.{}.{}".format(self.catalog, self.database, self.object)
        return "{}.{}".format(self.database, self.object)

    def get_database_name(self) -> str:
        return self.database

    def get_object_name(self) -> str:
        return self.object

    def get_catalog_name(self) -> Optional[str]:
        return self.catalog

    def with_object_name(self, object_name: str) -> "Identifier":
        return Identifier(self.database, object_name, self.catalog)

    def __str__(self) -> str:
        return self.get_full_name()
