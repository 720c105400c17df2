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
from typing import Dict, List, Optional

from pyhivecatalog.common.options import Options
from pyhivecatalog.common.options.config import CatalogOptions
from pyhivecatalog.metastore.metastore_client import MetastoreClient
from pyhivecatalog.metastore.model import (ColumnStatisticsObj, HiveDatabase,
                                           HiveFunction, HivePartition,
                                           HiveTable)
from pyhivecatalog.metastore.rest.api_request import \
    UpdateColumnStatisticsRequest
from pyhivecatalog.metastore.rest.api_response import (
    ColumnStatisticsResponse, ListDatabasesResponse, ListFunctionsResponse,
    ListPartitionsResponse, ListTablesResponse, VersionResponse)
from pyhivecatalog.metastore.rest.client import HttpClient
from pyhivecatalog.metastore.rest.resource_paths import ResourcePaths


class RESTMetastoreClient(MetastoreClient):
    """Metastore client speaking JSON over HTTP to a metastore service."""

    COLUMNS = "columns"
    CASCADE = "cascade"

    def __init__(self, options: Options):
        self.logger = logging.getLogger(self.__class__.__name__)
        uri = options.get(CatalogOptions.URI)
        if not uri:
            raise ValueError("Option {} is required by the REST metastore".format(CatalogOptions.URI.key()))
        self.client = HttpClient(
            uri,
            headers=options.extract_prefix_map(CatalogOptions.HTTP_HEADER_PREFIX),
            max_retries=options.get(CatalogOptions.HTTP_MAX_RETRIES),
            timeout=options.get(CatalogOptions.HTTP_TIMEOUT))
        self.resource_paths = ResourcePaths.for_catalog_properties(options)
        self.logger.debug("Metastore service at %s", self.client.uri)

    def get_version(self) -> str:
        return self.client.get(self.resource_paths.version(), VersionResponse).version

    # databases

    def list_databases(self) -> List[str]:
        return self.client.get(self.resource_paths.databases(), ListDatabasesResponse).databases

    def get_database(self, name: str) -> HiveDatabase:
        return self.client.get(self.resource_paths.database(name), HiveDatabase)

    def create_database(self, database: HiveDatabase):
        self.client.post(self.resource_paths.databases(), database)

    def alter_database(self, name: str, database: HiveDatabase):
        self.client.post(self.resource_paths.database(name), database)

    def drop_database(self, name: str, cascade: bool = False):
        self.client.delete_with_params(self.resource_paths.database(name), {self.CASCADE: str(cascade).lower()})

    # tables

    def list_tables(self, database_name: str) -> List[str]:
        return self.client.get(self.resource_paths.tables(database_name), ListTablesResponse).tables

    def get_table(self, database_name: str, table_name: str) -> HiveTable:
        return self.client.get(self.resource_paths.table(database_name, table_name), HiveTable)

    def create_table(self, table: HiveTable):
        self.client.post(self.resource_paths.tables(table.db_name), table)

    def alter_table(self, database_name: str, table_name: str, table: HiveTable):
        self.client.post(self.resource_paths.table(database_name, table_name), table)

    def drop_table(self, database_name: str, table_name: str):
        self.client.delete(self.resource_paths.table(database_name, table_name))

    # partitions

    def list_partitions(self, database_name: str, table_name: str) -> List[HivePartition]:
        return self.client.get(self.resource_paths.partitions(database_name, table_name),
                               ListPartitionsResponse).partitions

    def get_partition(self, database_name: str, table_name: str, values: List[str]) -> HivePartition:
        return self.client.get(self.resource_paths.partition(database_name, table_name, values), HivePartition)

    def create_partition(self, partition: HivePartition):
        self.client.post(self.resource_paths.partitions(partition.db_name, partition.table_name), partition)

    def alter_partition(self, database_name: str, table_name: str, partition: HivePartition):
        self.client.post(self.resource_paths.partition(database_name, table_name, partition.values), partition)

    def drop_partition(self, database_name: str, table_name: str, values: List[str]):
        self.client.delete(self.resource_paths.partition(database_name, table_name, values))

    # functions

    def list_functions(self, database_name: str) -> List[str]:
        return self.client.get(self.resource_paths.functions(database_name), ListFunctionsResponse).functions

    def get_function(self, database_name: str, function_name: str) -> HiveFunction:
        return self.client.get(self.resource_paths.function(database_name, function_name), HiveFunction)

    def create_function(self, function: HiveFunction):
        self.client.post(self.resource_paths.functions(function.db_name), function)

    def alter_function(self, database_name: str, function_name: str, function: HiveFunction):
        self.client.post(self.resource_paths.function(database_name, function_name), function)

    def drop_function(self, database_name: str, function_name: str):
        self.client.delete(self.resource_paths.function(database_name, function_name))

    # column statistics

    def get_table_column_statistics(self, database_name: str, table_name: str,
                                    column_names: Optional[List[str]] = None) -> List[ColumnStatisticsObj]:
        return self.client.get_with_params(self.resource_paths.table_statistics(database_name, table_name),
                                           self._columns_param(column_names),
                                           ColumnStatisticsResponse).column_statistics

    def update_table_column_statistics(self, database_name: str, table_name: str,
                                       statistics: List[ColumnStatisticsObj]):
        self.client.post(self.resource_paths.table_statistics(database_name, table_name),
                         UpdateColumnStatisticsRequest(statistics))

    def get_partition_column_statistics(self, database_name: str, table_name: str, values: List[str],
                                        column_names: Optional[List[str]] = None) -> List[ColumnStatisticsObj]:
        return self.client.get_with_params(
            self.resource_paths.partition_statistics(database_name, table_name, values),
            self._columns_param(column_names),
            ColumnStatisticsResponse).column_statistics

    def update_partition_column_statistics(self, database_name: str, table_name: str, values: List[str],
                                           statistics: List[ColumnStatisticsObj]):
        self.client.post(self.resource_paths.partition_statistics(database_name, table_name, values),
                         UpdateColumnStatisticsRequest(statistics))

    def _columns_param(self, column_names: Optional[List[str]]) -> Optional[Dict[str, str]]:
        if column_names is None:
            return None
        return {self.COLUMNS: ",".join(column_names)}

    def close(self):
        self.client.close()
