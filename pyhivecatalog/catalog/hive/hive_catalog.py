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
import threading
from typing import List, Optional, Union

from pyhivecatalog.catalog.alter_operation import (ALTER_DATABASE_OP,
                                                   ALTER_TABLE_OP,
                                                   AlterDatabaseOp,
                                                   AlterTableOp)
from pyhivecatalog.catalog.catalog import Catalog
from pyhivecatalog.catalog.catalog_exception import (
    CatalogException, DatabaseAlreadyExistException, DatabaseNotEmptyException,
    DatabaseNotExistException, FunctionAlreadyExistException,
    FunctionNotExistException, PartitionAlreadyExistException,
    PartitionNotExistException, PartitionSpecInvalidException,
    TableAlreadyExistException, TableNotExistException,
    TableNotPartitionedException, TablePartitionedException)
from pyhivecatalog.catalog.database import CatalogDatabase
from pyhivecatalog.catalog.function import CatalogFunction
from pyhivecatalog.catalog.hive import hive_stats_util
from pyhivecatalog.catalog.hive.hive_codec import HiveCodec, is_generic
from pyhivecatalog.catalog.hive.hive_merge import HiveMerge, resolve_operation
from pyhivecatalog.catalog.hive.hive_shim import HiveShim, HiveShimLoader
from pyhivecatalog.catalog.partition import (CatalogPartition,
                                             CatalogPartitionSpec)
from pyhivecatalog.catalog.stats import (CatalogColumnStatistics,
                                         CatalogTableStatistics)
from pyhivecatalog.catalog.table import CatalogTable
from pyhivecatalog.common.identifier import Identifier
from pyhivecatalog.metastore.metastore_client import (AlreadyExistsException,
                                                      InvalidOperationException,
                                                      MetastoreClient,
                                                      NoSuchObjectException)
from pyhivecatalog.metastore.model import HivePartition, HiveTable


def _to_identifier(identifier: Union[str, Identifier]) -> Identifier:
    if not isinstance(identifier, Identifier):
        identifier = Identifier.from_string(identifier)
    return identifier


class HiveCatalog(Catalog):
    """
    Catalog persisting its objects into a Hive metastore.

    Every call reads the metastore again, nothing is cached. Alters read the
    stored record, merge the request into it and write the result back; the
    metastore offers no compare-and-swap, so two concurrent alters of the same
    object may lose one of the updates.
    """

    def __init__(self, name: str, client: MetastoreClient, default_database: str = Catalog.DEFAULT_DATABASE,
                 hive_version: Optional[str] = None):
        if not name or not name.strip():
            raise ValueError("Catalog name cannot be empty")
        self.logger = logging.getLogger(self.__class__.__name__)
        self.name = name
        self.client = client
        self.default_database = default_database
        self.hive_version = hive_version
        self._shim: Optional[HiveShim] = None
        self._codec: Optional[HiveCodec] = None
        self._lock = threading.Lock()

    def open(self):
        with self._lock:
            if self._shim is None:
                version = self.hive_version or self.client.get_version()
                shim = HiveShimLoader.load(version)
                self._codec = HiveCodec(shim)
                self._shim = shim
        if not self.database_exists(self.default_database):
            raise CatalogException("Configured default database {} doesn't exist in catalog {}".format(
                self.default_database, self.name))
        self.logger.info("Opened catalog %s on Hive metastore %s", self.name, self._shim.get_version())

    def close(self):
        self.client.close()
        self.logger.info("Closed catalog %s", self.name)

    @property
    def shim(self) -> HiveShim:
        if self._shim is None:
            raise CatalogException("Catalog {} is not open".format(self.name))
        return self._shim

    @property
    def codec(self) -> HiveCodec:
        if self._codec is None:
            raise CatalogException("Catalog {} is not open".format(self.name))
        return self._codec

    # databases

    def list_databases(self) -> List[str]:
        return self.client.list_databases()

    def get_database(self, name: str) -> CatalogDatabase:
        try:
            return self.codec.decode_database(self.client.get_database(name))
        except NoSuchObjectException as e:
            raise DatabaseNotExistException(name) from e

    def database_exists(self, name: str) -> bool:
        try:
            self.client.get_database(name)
            return True
        except NoSuchObjectException:
            return False

    def create_database(self, database: CatalogDatabase, ignore_if_exists: bool):
        hive_database = self.codec.encode_database(database)
        try:
            self.client.create_database(hive_database)
        except AlreadyExistsException as e:
            if not ignore_if_exists:
                raise DatabaseAlreadyExistException(database.name) from e

    def alter_database(self, database: CatalogDatabase, ignore_if_not_exists: bool,
                       operation: Optional[AlterDatabaseOp] = None):
        operation, properties = resolve_operation(database.properties, operation, ALTER_DATABASE_OP,
                                                  AlterDatabaseOp)
        requested = self.codec.encode_database(database.copy(properties))
        try:
            existing = self.client.get_database(database.name)
            merged = HiveMerge.merge_database(existing, requested, operation)
            self.client.alter_database(database.name, merged)
        except NoSuchObjectException as e:
            if not ignore_if_not_exists:
                raise DatabaseNotExistException(database.name) from e

    def drop_database(self, name: str, ignore_if_not_exists: bool, cascade: bool = False):
        if not self.database_exists(name):
            if ignore_if_not_exists:
                return
            raise DatabaseNotExistException(name)
        if not cascade and (self.client.list_tables(name) or self.client.list_functions(name)):
            raise DatabaseNotEmptyException(name)
        try:
            self.client.drop_database(name, cascade)
        except NoSuchObjectException as e:
            if not ignore_if_not_exists:
                raise DatabaseNotExistException(name) from e
        except InvalidOperationException as e:
            raise DatabaseNotEmptyException(name) from e

    # tables

    def list_tables(self, database_name: str) -> List[str]:
        try:
            return self.client.list_tables(database_name)
        except NoSuchObjectException as e:
            raise DatabaseNotExistException(database_name) from e

    def get_table(self, identifier: Union[str, Identifier]) -> CatalogTable:
        return self.codec.decode_table(self._get_hive_table(_to_identifier(identifier)))

    def table_exists(self, identifier: Union[str, Identifier]) -> bool:
        identifier = _to_identifier(identifier)
        try:
            self.client.get_table(identifier.get_database_name(), identifier.get_object_name())
            return True
        except NoSuchObjectException:
            return False

    def create_table(self, identifier: Union[str, Identifier], table: CatalogTable, ignore_if_exists: bool):
        identifier = _to_identifier(identifier)
        if not self.database_exists(identifier.get_database_name()):
            raise DatabaseNotExistException(identifier.get_database_name())
        hive_table = self.codec.encode_table(identifier, table)
        hive_table.parameters = hive_stats_util.clean_on_create(hive_table.parameters)
        try:
            self.client.create_table(hive_table)
            self.logger.debug("Created table %s", identifier)
        except AlreadyExistsException as e:
            if not ignore_if_exists:
                raise TableAlreadyExistException(identifier) from e

    def alter_table(self, identifier: Union[str, Identifier], table: CatalogTable, ignore_if_not_exists: bool,
                    operation: Optional[AlterTableOp] = None):
        identifier = _to_identifier(identifier)
        operation, properties = resolve_operation(table.properties, operation, ALTER_TABLE_OP, AlterTableOp)
        requested = self.codec.encode_table(identifier, table.copy(properties))
        try:
            existing = self._get_hive_table(identifier)
        except TableNotExistException:
            if ignore_if_not_exists:
                return
            raise
        merged = HiveMerge.merge_table(existing, requested, operation)
        try:
            self.client.alter_table(identifier.get_database_name(), identifier.get_object_name(), merged)
        except NoSuchObjectException as e:
            if not ignore_if_not_exists:
                raise TableNotExistException(identifier) from e

    def rename_table(self, identifier: Union[str, Identifier], new_name: str, ignore_if_not_exists: bool):
        identifier = _to_identifier(identifier)
        new_identifier = identifier.with_object_name(new_name)
        try:
            hive_table = self._get_hive_table(identifier)
        except TableNotExistException:
            if ignore_if_not_exists:
                return
            raise
        if self.table_exists(new_identifier):
            raise TableAlreadyExistException(new_identifier)
        hive_table.table_name = new_identifier.get_object_name()
        try:
            self.client.alter_table(identifier.get_database_name(), identifier.get_object_name(), hive_table)
        except AlreadyExistsException as e:
            raise TableAlreadyExistException(new_identifier) from e
        except NoSuchObjectException as e:
            if not ignore_if_not_exists:
                raise TableNotExistException(identifier) from e

    def drop_table(self, identifier: Union[str, Identifier], ignore_if_not_exists: bool):
        identifier = _to_identifier(identifier)
        try:
            self.client.drop_table(identifier.get_database_name(), identifier.get_object_name())
        except NoSuchObjectException as e:
            if not ignore_if_not_exists:
                raise TableNotExistException(identifier) from e

    def _get_hive_table(self, identifier: Identifier) -> HiveTable:
        try:
            return self.client.get_table(identifier.get_database_name(), identifier.get_object_name())
        except NoSuchObjectException as e:
            raise TableNotExistException(identifier) from e

    # partitions

    def list_partitions(self, identifier: Union[str, Identifier],
                        partial_spec: Optional[CatalogPartitionSpec] = None) -> List[CatalogPartitionSpec]:
        identifier = _to_identifier(identifier)
        hive_table = self._get_partitioned_table(identifier)
        keys = [key.name for key in hive_table.partition_keys]
        wanted = partial_spec.get_spec() if partial_spec is not None else {}
        if any(key not in keys for key in wanted):
            raise PartitionSpecInvalidException(identifier, keys, wanted)
        specs = [self.codec.decode_partition_spec(hive_table, partition)
                 for partition in self.client.list_partitions(identifier.get_database_name(),
                                                              identifier.get_object_name())]
        return [spec for spec in specs if all(spec.get_spec().get(k) == v for k, v in wanted.items())]

    def get_partition(self, identifier: Union[str, Identifier], spec: CatalogPartitionSpec) -> CatalogPartition:
        identifier = _to_identifier(identifier)
        hive_table = self._get_partitioned_table(identifier)
        return self.codec.decode_partition(hive_table, self._get_hive_partition(identifier, hive_table, spec))

    def partition_exists(self, identifier: Union[str, Identifier], spec: CatalogPartitionSpec) -> bool:
        identifier = _to_identifier(identifier)
        try:
            hive_table = self._get_partitioned_table(identifier)
            self._get_hive_partition(identifier, hive_table, spec)
            return True
        except (TableNotExistException, PartitionSpecInvalidException, PartitionNotExistException):
            return False

    def create_partition(self, identifier: Union[str, Identifier], spec: CatalogPartitionSpec,
                         partition: CatalogPartition, ignore_if_exists: bool):
        identifier = _to_identifier(identifier)
        hive_table = self._get_partitioned_table(identifier)
        self._check_full_spec(identifier, hive_table, spec)
        hive_partition = self.codec.encode_partition(hive_table, spec, partition)
        hive_partition.parameters = hive_stats_util.clean_on_create(hive_partition.parameters)
        try:
            self.client.create_partition(hive_partition)
            self.logger.debug("Created partition %s of table %s",
                              self.codec.partition_name(hive_table, spec), identifier)
        except AlreadyExistsException as e:
            if not ignore_if_exists:
                raise PartitionAlreadyExistException(identifier, spec.get_spec()) from e

    def alter_partition(self, identifier: Union[str, Identifier], spec: CatalogPartitionSpec,
                        partition: CatalogPartition, ignore_if_not_exists: bool,
                        operation: Optional[AlterTableOp] = None):
        identifier = _to_identifier(identifier)
        operation, properties = resolve_operation(partition.properties, operation, ALTER_TABLE_OP, AlterTableOp)
        hive_table = self._get_partitioned_table(identifier)
        try:
            existing = self._get_hive_partition(identifier, hive_table, spec)
        except PartitionNotExistException:
            if ignore_if_not_exists:
                return
            raise
        requested = self.codec.encode_partition(hive_table, spec, partition.copy(properties))
        merged = HiveMerge.merge_partition(existing, requested, operation)
        self._alter_hive_partition(identifier, spec, merged)

    def drop_partition(self, identifier: Union[str, Identifier], spec: CatalogPartitionSpec,
                       ignore_if_not_exists: bool):
        identifier = _to_identifier(identifier)
        hive_table = self._get_partitioned_table(identifier)
        self._check_full_spec(identifier, hive_table, spec)
        try:
            self.client.drop_partition(identifier.get_database_name(), identifier.get_object_name(),
                                       self.codec.partition_values(hive_table, spec))
        except NoSuchObjectException as e:
            if not ignore_if_not_exists:
                raise PartitionNotExistException(identifier, spec.get_spec()) from e

    def _get_partitioned_table(self, identifier: Identifier) -> HiveTable:
        hive_table = self._get_hive_table(identifier)
        if is_generic(hive_table):
            raise CatalogException("Generic table {} does not support partitions".format(identifier))
        if not hive_table.partition_keys:
            raise TableNotPartitionedException(identifier)
        return hive_table

    @staticmethod
    def _check_full_spec(identifier: Identifier, hive_table: HiveTable, spec: CatalogPartitionSpec):
        keys = [key.name for key in hive_table.partition_keys]
        values = spec.get_spec()
        if sorted(values.keys()) != sorted(keys) or any(not isinstance(v, str) for v in values.values()):
            raise PartitionSpecInvalidException(identifier, keys, values)

    def _get_hive_partition(self, identifier: Identifier, hive_table: HiveTable,
                            spec: CatalogPartitionSpec) -> HivePartition:
        self._check_full_spec(identifier, hive_table, spec)
        try:
            return self.client.get_partition(identifier.get_database_name(), identifier.get_object_name(),
                                             self.codec.partition_values(hive_table, spec))
        except NoSuchObjectException as e:
            raise PartitionNotExistException(identifier, spec.get_spec()) from e

    def _alter_hive_partition(self, identifier: Identifier, spec: CatalogPartitionSpec, partition: HivePartition):
        try:
            self.client.alter_partition(identifier.get_database_name(), identifier.get_object_name(), partition)
        except NoSuchObjectException as e:
            raise PartitionNotExistException(identifier, spec.get_spec()) from e

    # functions

    def list_functions(self, database_name: str) -> List[str]:
        try:
            return self.client.list_functions(database_name)
        except NoSuchObjectException as e:
            raise DatabaseNotExistException(database_name) from e

    def get_function(self, identifier: Union[str, Identifier]) -> CatalogFunction:
        identifier = self._function_identifier(identifier)
        try:
            return self.codec.decode_function(
                self.client.get_function(identifier.get_database_name(), identifier.get_object_name()))
        except NoSuchObjectException as e:
            raise FunctionNotExistException(identifier) from e

    def function_exists(self, identifier: Union[str, Identifier]) -> bool:
        try:
            self.get_function(identifier)
            return True
        except FunctionNotExistException:
            return False

    def create_function(self, identifier: Union[str, Identifier], function: CatalogFunction,
                        ignore_if_exists: bool):
        identifier = self._function_identifier(identifier)
        if not self.database_exists(identifier.get_database_name()):
            raise DatabaseNotExistException(identifier.get_database_name())
        try:
            self.client.create_function(self.codec.encode_function(identifier, function))
        except AlreadyExistsException as e:
            if not ignore_if_exists:
                raise FunctionAlreadyExistException(identifier) from e

    def alter_function(self, identifier: Union[str, Identifier], function: CatalogFunction,
                       ignore_if_not_exists: bool):
        identifier = self._function_identifier(identifier)
        try:
            existing = self.client.get_function(identifier.get_database_name(), identifier.get_object_name())
            requested = self.codec.encode_function(identifier, function)
            requested.owner_name = existing.owner_name
            requested.create_time = existing.create_time
            self.client.alter_function(identifier.get_database_name(), identifier.get_object_name(), requested)
        except NoSuchObjectException as e:
            if not ignore_if_not_exists:
                raise FunctionNotExistException(identifier) from e

    def drop_function(self, identifier: Union[str, Identifier], ignore_if_not_exists: bool):
        identifier = self._function_identifier(identifier)
        try:
            self.client.drop_function(identifier.get_database_name(), identifier.get_object_name())
        except NoSuchObjectException as e:
            if not ignore_if_not_exists:
                raise FunctionNotExistException(identifier) from e

    @staticmethod
    def _function_identifier(identifier: Union[str, Identifier]) -> Identifier:
        # function names are case insensitive in the metastore
        identifier = _to_identifier(identifier)
        return identifier.with_object_name(identifier.get_object_name().lower())

    # statistics

    def get_table_statistics(self, identifier: Union[str, Identifier]) -> CatalogTableStatistics:
        hive_table = self._get_hive_table(_to_identifier(identifier))
        if is_generic(hive_table) or hive_table.partition_keys:
            return CatalogTableStatistics.UNKNOWN
        return hive_stats_util.to_table_statistics(hive_table.parameters)

    def get_table_column_statistics(self, identifier: Union[str, Identifier]) -> CatalogColumnStatistics:
        identifier = _to_identifier(identifier)
        hive_table = self._get_hive_table(identifier)
        if is_generic(hive_table) or hive_table.partition_keys:
            return CatalogColumnStatistics()
        objs = self.client.get_table_column_statistics(identifier.get_database_name(),
                                                       identifier.get_object_name(),
                                                       [col.name for col in hive_table.sd.cols])
        return CatalogColumnStatistics(self.codec.decode_column_statistics(objs))

    def get_partition_statistics(self, identifier: Union[str, Identifier],
                                 spec: CatalogPartitionSpec) -> CatalogTableStatistics:
        identifier = _to_identifier(identifier)
        hive_table = self._get_partitioned_table(identifier)
        hive_partition = self._get_hive_partition(identifier, hive_table, spec)
        return hive_stats_util.to_table_statistics(hive_partition.parameters)

    def get_partition_column_statistics(self, identifier: Union[str, Identifier],
                                        spec: CatalogPartitionSpec) -> CatalogColumnStatistics:
        identifier = _to_identifier(identifier)
        hive_table = self._get_partitioned_table(identifier)
        self._get_hive_partition(identifier, hive_table, spec)
        objs = self.client.get_partition_column_statistics(identifier.get_database_name(),
                                                           identifier.get_object_name(),
                                                           self.codec.partition_values(hive_table, spec),
                                                           [col.name for col in hive_table.sd.cols])
        return CatalogColumnStatistics(self.codec.decode_column_statistics(objs))

    def alter_table_statistics(self, identifier: Union[str, Identifier], statistics: CatalogTableStatistics,
                               ignore_if_not_exists: bool):
        identifier = _to_identifier(identifier)
        hive_table = self._get_hive_table_or_none(identifier, ignore_if_not_exists)
        if hive_table is None:
            return
        if is_generic(hive_table):
            self.logger.debug("Ignoring table statistics of generic table %s", identifier)
            return
        if hive_table.partition_keys:
            raise TablePartitionedException(identifier)
        if hive_stats_util.update_statistics(hive_table.parameters, statistics, self.shim):
            self.client.alter_table(identifier.get_database_name(), identifier.get_object_name(), hive_table)

    def alter_table_column_statistics(self, identifier: Union[str, Identifier],
                                      column_statistics: CatalogColumnStatistics, ignore_if_not_exists: bool):
        identifier = _to_identifier(identifier)
        hive_table = self._get_hive_table_or_none(identifier, ignore_if_not_exists)
        if hive_table is None:
            return
        if is_generic(hive_table):
            self.logger.debug("Ignoring column statistics of generic table %s", identifier)
            return
        if hive_table.partition_keys:
            raise TablePartitionedException(identifier)
        table = self.codec.decode_table(hive_table)
        objs = self.codec.encode_column_statistics(table.data_columns(),
                                                   column_statistics.get_column_statistics_data(), identifier)
        self.client.update_table_column_statistics(identifier.get_database_name(), identifier.get_object_name(),
                                                   objs)

    def alter_partition_statistics(self, identifier: Union[str, Identifier], spec: CatalogPartitionSpec,
                                   statistics: CatalogTableStatistics, ignore_if_not_exists: bool):
        identifier = _to_identifier(identifier)
        hive_partition = self._get_hive_partition_or_none(identifier, spec, ignore_if_not_exists)
        if hive_partition is None:
            return
        if hive_stats_util.update_statistics(hive_partition.parameters, statistics, self.shim):
            self._alter_hive_partition(identifier, spec, hive_partition)

    def alter_partition_column_statistics(self, identifier: Union[str, Identifier], spec: CatalogPartitionSpec,
                                          column_statistics: CatalogColumnStatistics, ignore_if_not_exists: bool):
        identifier = _to_identifier(identifier)
        hive_partition = self._get_hive_partition_or_none(identifier, spec, ignore_if_not_exists)
        if hive_partition is None:
            return
        table = self.codec.decode_table(self._get_hive_table(identifier))
        objs = self.codec.encode_column_statistics(table.data_columns(),
                                                   column_statistics.get_column_statistics_data(), identifier)
        self.client.update_partition_column_statistics(identifier.get_database_name(),
                                                       identifier.get_object_name(), hive_partition.values, objs)

    def _get_hive_table_or_none(self, identifier: Identifier, ignore_if_not_exists: bool) -> Optional[HiveTable]:
        try:
            return self._get_hive_table(identifier)
        except TableNotExistException:
            if ignore_if_not_exists:
                return None
            raise

    def _get_hive_partition_or_none(self, identifier: Identifier, spec: CatalogPartitionSpec,
                                    ignore_if_not_exists: bool) -> Optional[HivePartition]:
        try:
            hive_table = self._get_partitioned_table(identifier)
            return self._get_hive_partition(identifier, hive_table, spec)
        except (TableNotExistException, PartitionNotExistException):
            if ignore_if_not_exists:
                return None
            raise
