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

from abc import ABC, abstractmethod
from typing import List, Optional, Union

from pyhivecatalog.catalog.alter_operation import AlterDatabaseOp, AlterTableOp
from pyhivecatalog.catalog.database import CatalogDatabase
from pyhivecatalog.catalog.function import CatalogFunction
from pyhivecatalog.catalog.partition import (CatalogPartition,
                                             CatalogPartitionSpec)
from pyhivecatalog.catalog.stats import (CatalogColumnStatistics,
                                         CatalogTableStatistics)
from pyhivecatalog.catalog.table import CatalogTable
from pyhivecatalog.common.identifier import Identifier


class Catalog(ABC):
    """
    This interface is responsible for reading and writing
    metadata such as databases, tables, partitions, functions and
    statistics in an external metastore.
    """
    DEFAULT_DATABASE = "default"

    @abstractmethod
    def open(self):
        """Connects the catalog to its metastore."""

    @abstractmethod
    def close(self):
        """Releases the metastore connection."""

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    # databases

    @abstractmethod
    def list_databases(self) -> List[str]:
        """Names of all databases."""

    @abstractmethod
    def get_database(self, name: str) -> CatalogDatabase:
        """Get the database identified by the given name."""

    @abstractmethod
    def database_exists(self, name: str) -> bool:
        pass

    @abstractmethod
    def create_database(self, database: CatalogDatabase, ignore_if_exists: bool):
        """Create a database."""

    @abstractmethod
    def alter_database(self, database: CatalogDatabase, ignore_if_not_exists: bool,
                       operation: Optional[AlterDatabaseOp] = None):
        """Alter the database named ``database.name``; without an operation its properties are merged."""

    @abstractmethod
    def drop_database(self, name: str, ignore_if_not_exists: bool, cascade: bool = False):
        """Drop a database, together with its tables and functions when ``cascade`` is set."""

    # tables

    @abstractmethod
    def list_tables(self, database_name: str) -> List[str]:
        pass

    @abstractmethod
    def get_table(self, identifier: Union[str, Identifier]) -> CatalogTable:
        """Get the table identified by the given Identifier."""

    @abstractmethod
    def table_exists(self, identifier: Union[str, Identifier]) -> bool:
        pass

    @abstractmethod
    def create_table(self, identifier: Union[str, Identifier], table: CatalogTable, ignore_if_exists: bool):
        """Create table with schema."""

    @abstractmethod
    def alter_table(self, identifier: Union[str, Identifier], table: CatalogTable, ignore_if_not_exists: bool,
                    operation: Optional[AlterTableOp] = None):
        """Alter a table; without an operation the stored table is replaced."""

    @abstractmethod
    def rename_table(self, identifier: Union[str, Identifier], new_name: str, ignore_if_not_exists: bool):
        """Rename a table within its database."""

    @abstractmethod
    def drop_table(self, identifier: Union[str, Identifier], ignore_if_not_exists: bool):
        pass

    # partitions

    @abstractmethod
    def list_partitions(self, identifier: Union[str, Identifier],
                        partial_spec: Optional[CatalogPartitionSpec] = None) -> List[CatalogPartitionSpec]:
        """Specs of the partitions of a table, optionally only those matching a partial spec."""

    @abstractmethod
    def get_partition(self, identifier: Union[str, Identifier], spec: CatalogPartitionSpec) -> CatalogPartition:
        pass

    @abstractmethod
    def partition_exists(self, identifier: Union[str, Identifier], spec: CatalogPartitionSpec) -> bool:
        pass

    @abstractmethod
    def create_partition(self, identifier: Union[str, Identifier], spec: CatalogPartitionSpec,
                         partition: CatalogPartition, ignore_if_exists: bool):
        pass

    @abstractmethod
    def alter_partition(self, identifier: Union[str, Identifier], spec: CatalogPartitionSpec,
                        partition: CatalogPartition, ignore_if_not_exists: bool,
                        operation: Optional[AlterTableOp] = None):
        pass

    @abstractmethod
    def drop_partition(self, identifier: Union[str, Identifier], spec: CatalogPartitionSpec,
                       ignore_if_not_exists: bool):
        pass

    # functions

    @abstractmethod
    def list_functions(self, database_name: str) -> List[str]:
        pass

    @abstractmethod
    def get_function(self, identifier: Union[str, Identifier]) -> CatalogFunction:
        pass

    @abstractmethod
    def function_exists(self, identifier: Union[str, Identifier]) -> bool:
        pass

    @abstractmethod
    def create_function(self, identifier: Union[str, Identifier], function: CatalogFunction,
                        ignore_if_exists: bool):
        pass

    @abstractmethod
    def alter_function(self, identifier: Union[str, Identifier], function: CatalogFunction,
                       ignore_if_not_exists: bool):
        pass

    @abstractmethod
    def drop_function(self, identifier: Union[str, Identifier], ignore_if_not_exists: bool):
        pass

    # statistics

    @abstractmethod
    def get_table_statistics(self, identifier: Union[str, Identifier]) -> CatalogTableStatistics:
        pass

    @abstractmethod
    def get_table_column_statistics(self, identifier: Union[str, Identifier]) -> CatalogColumnStatistics:
        pass

    @abstractmethod
    def get_partition_statistics(self, identifier: Union[str, Identifier],
                                 spec: CatalogPartitionSpec) -> CatalogTableStatistics:
        pass

    @abstractmethod
    def get_partition_column_statistics(self, identifier: Union[str, Identifier],
                                        spec: CatalogPartitionSpec) -> CatalogColumnStatistics:
        pass

    @abstractmethod
    def alter_table_statistics(self, identifier: Union[str, Identifier], statistics: CatalogTableStatistics,
                               ignore_if_not_exists: bool):
        pass

    @abstractmethod
    def alter_table_column_statistics(self, identifier: Union[str, Identifier],
                                      column_statistics: CatalogColumnStatistics, ignore_if_not_exists: bool):
        pass

    @abstractmethod
    def alter_partition_statistics(self, identifier: Union[str, Identifier], spec: CatalogPartitionSpec,
                                   statistics: CatalogTableStatistics, ignore_if_not_exists: bool):
        pass

    @abstractmethod
    def alter_partition_column_statistics(self, identifier: Union[str, Identifier], spec: CatalogPartitionSpec,
                                          column_statistics: CatalogColumnStatistics, ignore_if_not_exists: bool):
        pass
