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

import copy
import logging
import threading
import time
from typing import Dict, List, Optional, Tuple

from pyhivecatalog.metastore.metastore_client import (AlreadyExistsException,
                                                      InvalidOperationException,
                                                      MetastoreClient,
                                                      NoSuchObjectException)
from pyhivecatalog.metastore.model import (ColumnStatisticsObj, HiveDatabase,
                                           HiveFunction, HivePartition,
                                           HiveTable)

TableKey = Tuple[str, str]

DEFAULT_DATABASE = "default"


class MemoryMetastoreClient(MetastoreClient):
    """
    In-process metastore keeping every record in memory.

    All records are deep copied on the way in and out, so callers never observe
    each other's mutations. A single re-entrant lock serializes every call.
    """

    def __init__(self, version: str = "3.1.2"):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.version = version
        self._lock = threading.RLock()
        self._databases: Dict[str, HiveDatabase] = {}
        self._tables: Dict[TableKey, HiveTable] = {}
        self._partitions: Dict[TableKey, Dict[Tuple[str, ...], HivePartition]] = {}
        self._functions: Dict[TableKey, HiveFunction] = {}
        self._table_column_stats: Dict[TableKey, Dict[str, ColumnStatisticsObj]] = {}
        self._partition_column_stats: Dict[Tuple[str, str, Tuple[str, ...]], Dict[str, ColumnStatisticsObj]] = {}
        # a metastore always carries the default database
        self._databases[DEFAULT_DATABASE] = HiveDatabase(name=DEFAULT_DATABASE, description="Default Hive database")

    def get_version(self) -> str:
        return self.version

    # databases

    def list_databases(self) -> List[str]:
        with self._lock:
            return sorted(self._databases.keys())

    def get_database(self, name: str) -> HiveDatabase:
        with self._lock:
            return copy.deepcopy(self._get_database(name))

    def create_database(self, database: HiveDatabase):
        with self._lock:
            if database.name in self._databases:
                raise AlreadyExistsException("Database {} already exists".format(database.name))
            self._databases[database.name] = copy.deepcopy(database)
            self.logger.debug("Created database %s", database.name)

    def alter_database(self, name: str, database: HiveDatabase):
        with self._lock:
            self._get_database(name)
            if database.name != name:
                raise InvalidOperationException("Database {} cannot be renamed".format(name))
            self._databases[name] = copy.deepcopy(database)

    def drop_database(self, name: str, cascade: bool = False):
        with self._lock:
            self._get_database(name)
            tables = [key for key in self._tables if key[0] == name]
            functions = [key for key in self._functions if key[0] == name]
            if (tables or functions) and not cascade:
                raise InvalidOperationException("Database {} is not empty".format(name))
            for db_name, table_name in tables:
                self._drop_table(db_name, table_name)
            for key in functions:
                del self._functions[key]
            del self._databases[name]

    # tables

    def list_tables(self, database_name: str) -> List[str]:
        with self._lock:
            self._get_database(database_name)
            return sorted(table for db, table in self._tables if db == database_name)

    def get_table(self, database_name: str, table_name: str) -> HiveTable:
        with self._lock:
            return copy.deepcopy(self._get_table(database_name, table_name))

    def create_table(self, table: HiveTable):
        with self._lock:
            self._get_database(table.db_name)
            key = (table.db_name, table.table_name)
            if key in self._tables:
                raise AlreadyExistsException("Table {}.{} already exists".format(*key))
            stored = copy.deepcopy(table)
            if not stored.create_time:
                stored.create_time = int(time.time())
            self._tables[key] = stored
            self._partitions[key] = {}

    def alter_table(self, database_name: str, table_name: str, table: HiveTable):
        with self._lock:
            key = (database_name, table_name)
            self._get_table(database_name, table_name)
            new_key = (table.db_name, table.table_name)
            if new_key != key:
                self._get_database(table.db_name)
                if new_key in self._tables:
                    raise AlreadyExistsException("Table {}.{} already exists".format(*new_key))
                self._rename_table(key, new_key)
            self._tables[new_key] = copy.deepcopy(table)
            # statistics of columns that no longer exist are dropped
            columns = set(col.name for col in table.sd.cols)
            stats = self._table_column_stats.get(new_key)
            if stats:
                for column in [name for name in stats if name not in columns]:
                    del stats[column]

    def _rename_table(self, key: TableKey, new_key: TableKey):
        del self._tables[key]
        partitions = self._partitions.pop(key, {})
        for partition in partitions.values():
            partition.db_name, partition.table_name = new_key
        self._partitions[new_key] = partitions
        if key in self._table_column_stats:
            self._table_column_stats[new_key] = self._table_column_stats.pop(key)
        for stats_key in [k for k in self._partition_column_stats if k[:2] == key]:
            self._partition_column_stats[new_key + (stats_key[2],)] = self._partition_column_stats.pop(stats_key)

    def drop_table(self, database_name: str, table_name: str):
        with self._lock:
            self._get_table(database_name, table_name)
            self._drop_table(database_name, table_name)

    def _drop_table(self, database_name: str, table_name: str):
        key = (database_name, table_name)
        del self._tables[key]
        self._partitions.pop(key, None)
        self._table_column_stats.pop(key, None)
        for stats_key in [k for k in self._partition_column_stats if k[:2] == key]:
            del self._partition_column_stats[stats_key]

    # partitions

    def list_partitions(self, database_name: str, table_name: str) -> List[HivePartition]:
        with self._lock:
            self._get_table(database_name, table_name)
            partitions = self._partitions[(database_name, table_name)]
            return [copy.deepcopy(partitions[values]) for values in sorted(partitions)]

    def get_partition(self, database_name: str, table_name: str, values: List[str]) -> HivePartition:
        with self._lock:
            return copy.deepcopy(self._get_partition(database_name, table_name, values))

    def create_partition(self, partition: HivePartition):
        with self._lock:
            table = self._get_table(partition.db_name, partition.table_name)
            if len(partition.values) != len(table.partition_keys):
                raise InvalidOperationException(
                    "Partition values {} do not match partition keys of {}.{}".format(
                        partition.values, partition.db_name, partition.table_name))
            partitions = self._partitions[(partition.db_name, partition.table_name)]
            values = tuple(partition.values)
            if values in partitions:
                raise AlreadyExistsException("Partition {} of {}.{} already exists".format(
                    partition.values, partition.db_name, partition.table_name))
            stored = copy.deepcopy(partition)
            if not stored.create_time:
                stored.create_time = int(time.time())
            partitions[values] = stored

    def alter_partition(self, database_name: str, table_name: str, partition: HivePartition):
        with self._lock:
            self._get_partition(database_name, table_name, partition.values)
            self._partitions[(database_name, table_name)][tuple(partition.values)] = copy.deepcopy(partition)

    def drop_partition(self, database_name: str, table_name: str, values: List[str]):
        with self._lock:
            self._get_partition(database_name, table_name, values)
            del self._partitions[(database_name, table_name)][tuple(values)]
            self._partition_column_stats.pop((database_name, table_name, tuple(values)), None)

    # functions

    def list_functions(self, database_name: str) -> List[str]:
        with self._lock:
            self._get_database(database_name)
            return sorted(name for db, name in self._functions if db == database_name)

    def get_function(self, database_name: str, function_name: str) -> HiveFunction:
        with self._lock:
            return copy.deepcopy(self._get_function(database_name, function_name))

    def create_function(self, function: HiveFunction):
        with self._lock:
            self._get_database(function.db_name)
            key = (function.db_name, function.function_name)
            if key in self._functions:
                raise AlreadyExistsException("Function {}.{} already exists".format(*key))
            stored = copy.deepcopy(function)
            if not stored.create_time:
                stored.create_time = int(time.time())
            self._functions[key] = stored

    def alter_function(self, database_name: str, function_name: str, function: HiveFunction):
        with self._lock:
            self._get_function(database_name, function_name)
            self._functions[(database_name, function_name)] = copy.deepcopy(function)

    def drop_function(self, database_name: str, function_name: str):
        with self._lock:
            self._get_function(database_name, function_name)
            del self._functions[(database_name, function_name)]

    # column statistics

    def get_table_column_statistics(self, database_name: str, table_name: str,
                                    column_names: Optional[List[str]] = None) -> List[ColumnStatisticsObj]:
        with self._lock:
            self._get_table(database_name, table_name)
            stats = self._table_column_stats.get((database_name, table_name), {})
            return self._select(stats, column_names)

    def update_table_column_statistics(self, database_name: str, table_name: str,
                                       statistics: List[ColumnStatisticsObj]):
        with self._lock:
            table = self._get_table(database_name, table_name)
            self._check_columns(table, statistics)
            stats = self._table_column_stats.setdefault((database_name, table_name), {})
            for obj in statistics:
                stats[obj.col_name] = copy.deepcopy(obj)

    def get_partition_column_statistics(self, database_name: str, table_name: str, values: List[str],
                                        column_names: Optional[List[str]] = None) -> List[ColumnStatisticsObj]:
        with self._lock:
            self._get_partition(database_name, table_name, values)
            stats = self._partition_column_stats.get((database_name, table_name, tuple(values)), {})
            return self._select(stats, column_names)

    def update_partition_column_statistics(self, database_name: str, table_name: str, values: List[str],
                                           statistics: List[ColumnStatisticsObj]):
        with self._lock:
            self._get_partition(database_name, table_name, values)
            self._check_columns(self._get_table(database_name, table_name), statistics)
            stats = self._partition_column_stats.setdefault((database_name, table_name, tuple(values)), {})
            for obj in statistics:
                stats[obj.col_name] = copy.deepcopy(obj)

    # helpers

    @staticmethod
    def _select(stats: Dict[str, ColumnStatisticsObj], column_names: Optional[List[str]]):
        names = list(stats.keys()) if column_names is None else [name for name in column_names if name in stats]
        return [copy.deepcopy(stats[name]) for name in names]

    @staticmethod
    def _check_columns(table: HiveTable, statistics: List[ColumnStatisticsObj]):
        columns = set(col.name for col in table.sd.cols)
        for obj in statistics:
            if obj.col_name not in columns:
                raise InvalidOperationException("Column {} does not exist in {}.{}".format(
                    obj.col_name, table.db_name, table.table_name))

    def _get_database(self, name: str) -> HiveDatabase:
        database = self._databases.get(name)
        if database is None:
            raise NoSuchObjectException("Database {} does not exist".format(name))
        return database

    def _get_table(self, database_name: str, table_name: str) -> HiveTable:
        table = self._tables.get((database_name, table_name))
        if table is None:
            raise NoSuchObjectException("Table {}.{} does not exist".format(database_name, table_name))
        return table

    def _get_partition(self, database_name: str, table_name: str, values: List[str]) -> HivePartition:
        self._get_table(database_name, table_name)
        partition = self._partitions[(database_name, table_name)].get(tuple(values))
        if partition is None:
            raise NoSuchObjectException("Partition {} of {}.{} does not exist".format(
                values, database_name, table_name))
        return partition

    def _get_function(self, database_name: str, function_name: str) -> HiveFunction:
        function = self._functions.get((database_name, function_name))
        if function is None:
            raise NoSuchObjectException("Function {}.{} does not exist".format(database_name, function_name))
        return function
