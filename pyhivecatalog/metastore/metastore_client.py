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
from typing import List, Optional

from pyhivecatalog.metastore.model import (ColumnStatisticsObj, HiveDatabase,
                                           HiveFunction, HivePartition,
                                           HiveTable)


class MetastoreException(Exception):
    """Base of the errors reported by a metastore service"""


class NoSuchObjectException(MetastoreException):
    """The requested metastore object does not exist"""


class AlreadyExistsException(MetastoreException):
    """A metastore object with the same name already exists"""


class InvalidOperationException(MetastoreException):
    """The metastore refused the operation"""


class MetastoreClient(ABC):
    """
    Record level access to a Hive style metastore.

    Every call is a single round trip; records passed in and handed out are
    never shared with the client's own state.
    """

    @abstractmethod
    def get_version(self) -> str:
        """Version string reported by the metastore service, e.g. ``3.1.2``."""

    # databases

    @abstractmethod
    def list_databases(self) -> List[str]:
        pass

    @abstractmethod
    def get_database(self, name: str) -> HiveDatabase:
        pass

    @abstractmethod
    def create_database(self, database: HiveDatabase):
        pass

    @abstractmethod
    def alter_database(self, name: str, database: HiveDatabase):
        pass

    @abstractmethod
    def drop_database(self, name: str, cascade: bool = False):
        """Drops a database; without cascade a database holding tables or functions is refused."""

    # tables

    @abstractmethod
    def list_tables(self, database_name: str) -> List[str]:
        pass

    @abstractmethod
    def get_table(self, database_name: str, table_name: str) -> HiveTable:
        pass

    @abstractmethod
    def create_table(self, table: HiveTable):
        pass

    @abstractmethod
    def alter_table(self, database_name: str, table_name: str, table: HiveTable):
        """Replaces a table record; a different name in ``table`` renames the table."""

    @abstractmethod
    def drop_table(self, database_name: str, table_name: str):
        pass

    # partitions

    @abstractmethod
    def list_partitions(self, database_name: str, table_name: str) -> List[HivePartition]:
        pass

    @abstractmethod
    def get_partition(self, database_name: str, table_name: str, values: List[str]) -> HivePartition:
        pass

    @abstractmethod
    def create_partition(self, partition: HivePartition):
        pass

    @abstractmethod
    def alter_partition(self, database_name: str, table_name: str, partition: HivePartition):
        pass

    @abstractmethod
    def drop_partition(self, database_name: str, table_name: str, values: List[str]):
        pass

    # functions

    @abstractmethod
    def list_functions(self, database_name: str) -> List[str]:
        pass

    @abstractmethod
    def get_function(self, database_name: str, function_name: str) -> HiveFunction:
        pass

    @abstractmethod
    def create_function(self, function: HiveFunction):
        pass

    @abstractmethod
    def alter_function(self, database_name: str, function_name: str, function: HiveFunction):
        pass

    @abstractmethod
    def drop_function(self, database_name: str, function_name: str):
        pass

    # column statistics

    @abstractmethod
    def get_table_column_statistics(self, database_name: str, table_name: str,
                                    column_names: Optional[List[str]] = None) -> List[ColumnStatisticsObj]:
        pass

    @abstractmethod
    def update_table_column_statistics(self, database_name: str, table_name: str,
                                       statistics: List[ColumnStatisticsObj]):
        """Upserts statistics per column; columns not mentioned keep theirs."""

    @abstractmethod
    def get_partition_column_statistics(self, database_name: str, table_name: str, values: List[str],
                                        column_names: Optional[List[str]] = None) -> List[ColumnStatisticsObj]:
        pass

    @abstractmethod
    def update_partition_column_statistics(self, database_name: str, table_name: str, values: List[str],
                                           statistics: List[ColumnStatisticsObj]):
        pass

    def close(self):
        pass
