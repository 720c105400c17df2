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

from typing import List, Optional

from pyhivecatalog.common.options import Options
from pyhivecatalog.common.options.config import CatalogOptions
from pyhivecatalog.metastore.rest.rest_util import RESTUtil


class ResourcePaths:
    V1 = "v1"
    DATABASES = "databases"
    TABLES = "tables"
    PARTITIONS = "partitions"
    FUNCTIONS = "functions"
    STATISTICS = "statistics"

    def __init__(self, prefix: Optional[str] = None):
        self.base_path = "/{}/{}".format(self.V1, prefix or "").rstrip("/")

    @classmethod
    def for_catalog_properties(
            cls, options: Options) -> "ResourcePaths":
        prefix = options.get(CatalogOptions.PREFIX, "")
        return cls(prefix)

    def version(self) -> str:
        return "{}/version".format(self.base_path)

    def databases(self) -> str:
        return "{}/{}".format(self.base_path, self.DATABASES)

    def database(self, name: str) -> str:
        return "{}/{}/{}".format(self.base_path, self.DATABASES, RESTUtil.encode_string(name))

    def tables(self, database_name: str) -> str:
        return "{}/{}".format(self.database(database_name), self.TABLES)

    def table(self, database_name: str, table_name: str) -> str:
        return "{}/{}".format(self.tables(database_name), RESTUtil.encode_string(table_name))

    def table_statistics(self, database_name: str, table_name: str) -> str:
        return "{}/{}".format(self.table(database_name, table_name), self.STATISTICS)

    def partitions(self, database_name: str, table_name: str) -> str:
        return "{}/{}".format(self.table(database_name, table_name), self.PARTITIONS)

    def partition(self, database_name: str, table_name: str, values: List[str]) -> str:
        return "{}/{}".format(self.partitions(database_name, table_name), RESTUtil.encode_values(values))

    def partition_statistics(self, database_name: str, table_name: str, values: List[str]) -> str:
        return "{}/{}".format(self.partition(database_name, table_name, values), self.STATISTICS)

    def functions(self, database_name: str) -> str:
        return "{}/{}".format(self.database(database_name), self.FUNCTIONS)

    def function(self, database_name: str, function_name: str) -> str:
        return "{}/{}".format(self.functions(database_name), RESTUtil.encode_string(function_name))
