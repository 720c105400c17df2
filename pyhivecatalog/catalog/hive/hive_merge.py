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
from enum import Enum
from typing import Dict, Optional, Tuple, Type

from pyhivecatalog.catalog.alter_operation import AlterDatabaseOp, AlterTableOp
from pyhivecatalog.catalog.catalog_exception import (CatalogException,
                                                     ReservedPropertyException)
from pyhivecatalog.catalog.hive.hive_codec import (COMMENT, GENERIC_PREFIX,
                                                   IS_GENERIC, is_generic)
from pyhivecatalog.metastore.model import HiveDatabase, HivePartition, HiveTable

logger = logging.getLogger(__name__)

_GENERIC_TABLE_OPS = (None, AlterTableOp.REPLACE_ALL, AlterTableOp.CHANGE_TBL_PROPS)
# partitions carry no columns of their own
_PARTITION_OPS = (None, AlterTableOp.REPLACE_ALL, AlterTableOp.CHANGE_TBL_PROPS, AlterTableOp.CHANGE_STORAGE,
                  AlterTableOp.CHANGE_LOCATION, AlterTableOp.CHANGE_SERDE_PROPS)


def resolve_operation(properties: Dict[str, str], operation: Optional[Enum], sentinel_key: str,
                      op_type: Type[Enum]) -> Tuple[Optional[Enum], Dict[str, str]]:
    """
    Returns the effective alter operation and the properties without the sentinel key.

    An operation tagged inside the properties under ``sentinel_key`` is honored when no
    explicit operation is given.
    """
    remaining = dict(properties)
    tag = remaining.pop(sentinel_key, None)
    if tag is None:
        return operation, remaining
    try:
        tagged = op_type(tag)
    except ValueError as e:
        raise ReservedPropertyException(
            sentinel_key, "Unknown alter operation {} under property {}".format(tag, sentinel_key)) from e
    if operation is not None and operation != tagged:
        raise ValueError("Alter operation {} conflicts with {} tagged under {}".format(
            operation, tagged, sentinel_key))
    return tagged, remaining


def _user_properties(parameters: Dict[str, str]) -> Dict[str, str]:
    # the comment changes only with a full replace
    return {key: value for key, value in parameters.items()
            if key not in (COMMENT, IS_GENERIC) and not key.startswith(GENERIC_PREFIX)}


class HiveMerge:
    """Combines an existing metastore record with a requested one according to an alter operation."""

    @staticmethod
    def merge_database(existing: HiveDatabase, requested: HiveDatabase,
                       operation: Optional[AlterDatabaseOp]) -> HiveDatabase:
        merged = copy.deepcopy(existing)
        op = operation or AlterDatabaseOp.CHANGE_PROPS
        logger.debug("Merging database %s with %s", existing.name, op.value)
        if op == AlterDatabaseOp.REPLACE_ALL:
            merged.description = requested.description
            merged.parameters = dict(requested.parameters)
            if requested.location_uri is not None:
                merged.location_uri = requested.location_uri
        elif op == AlterDatabaseOp.CHANGE_PROPS:
            merged.parameters.update(requested.parameters)
        elif op == AlterDatabaseOp.CHANGE_LOCATION:
            if requested.location_uri is None:
                raise ValueError("{} of database {} needs a location".format(op.value, existing.name))
            merged.location_uri = requested.location_uri
        elif op == AlterDatabaseOp.CHANGE_OWNER:
            if requested.owner_name is None:
                raise ValueError("{} of database {} needs an owner".format(op.value, existing.name))
            merged.owner_name = requested.owner_name
        return merged

    @staticmethod
    def merge_table(existing: HiveTable, requested: HiveTable, operation: Optional[AlterTableOp]) -> HiveTable:
        name = "{}.{}".format(existing.db_name, existing.table_name)
        generic = is_generic(existing)
        if generic != is_generic(requested):
            raise CatalogException("Table {} cannot be altered between generic and native".format(name))
        if generic and operation not in _GENERIC_TABLE_OPS:
            raise CatalogException("Alter operation {} is not supported by generic table {}".format(
                operation.value, name))
        logger.debug("Merging table %s with %s", name, operation.value if operation else "full replace")

        merged = copy.deepcopy(existing)
        if operation is None or operation == AlterTableOp.REPLACE_ALL:
            HiveMerge._check_partition_keys(existing, requested, name)
            merged.sd = copy.deepcopy(requested.sd)
            if merged.sd.location is None:
                merged.sd.location = existing.sd.location
            merged.parameters = dict(requested.parameters)
            merged.primary_key = copy.deepcopy(requested.primary_key)
            merged.not_null_constraints = copy.deepcopy(requested.not_null_constraints)
        elif operation == AlterTableOp.CHANGE_TBL_PROPS:
            merged.parameters.update(_user_properties(requested.parameters))
        elif operation == AlterTableOp.CHANGE_STORAGE:
            HiveMerge._replace_storage(merged, requested)
        elif operation == AlterTableOp.CHANGE_SERDE_PROPS:
            merged.sd.serde_info.parameters.update(_user_properties(requested.parameters))
        elif operation == AlterTableOp.CHANGE_LOCATION:
            HiveMerge._check_location(requested.sd.location, operation, name)
            merged.sd.location = requested.sd.location
        elif operation == AlterTableOp.CHANGE_COLUMNS:
            HiveMerge._check_partition_keys(existing, requested, name)
            merged.sd.cols = copy.deepcopy(requested.sd.cols)
            merged.primary_key = copy.deepcopy(requested.primary_key)
            merged.not_null_constraints = copy.deepcopy(requested.not_null_constraints)
        return merged

    @staticmethod
    def merge_partition(existing: HivePartition, requested: HivePartition,
                        operation: Optional[AlterTableOp]) -> HivePartition:
        name = "{}.{} {}".format(existing.db_name, existing.table_name, existing.values)
        if operation not in _PARTITION_OPS:
            raise CatalogException("Alter operation {} is not supported for partition {}".format(
                operation.value, name))
        logger.debug("Merging partition %s with %s", name, operation.value if operation else "full replace")

        merged = copy.deepcopy(existing)
        if operation is None or operation == AlterTableOp.REPLACE_ALL:
            merged.sd = copy.deepcopy(requested.sd)
            if merged.sd.location is None:
                merged.sd.location = existing.sd.location
            merged.parameters = dict(requested.parameters)
        elif operation == AlterTableOp.CHANGE_TBL_PROPS:
            merged.parameters.update(_user_properties(requested.parameters))
        elif operation == AlterTableOp.CHANGE_STORAGE:
            HiveMerge._replace_storage(merged, requested)
        elif operation == AlterTableOp.CHANGE_SERDE_PROPS:
            merged.sd.serde_info.parameters.update(_user_properties(requested.parameters))
        elif operation == AlterTableOp.CHANGE_LOCATION:
            HiveMerge._check_location(requested.sd.location, operation, name)
            merged.sd.location = requested.sd.location
        return merged

    @staticmethod
    def _check_partition_keys(existing: HiveTable, requested: HiveTable, name: str):
        if [key.name for key in existing.partition_keys] != [key.name for key in requested.partition_keys]:
            raise CatalogException("Partition keys of table {} cannot be changed from {} to {}".format(
                name, [key.name for key in existing.partition_keys], [key.name for key in requested.partition_keys]))

    @staticmethod
    def _check_location(location: Optional[str], operation: AlterTableOp, name: str):
        if location is None:
            raise ValueError("{} of {} needs a location".format(operation.value, name))

    @staticmethod
    def _replace_storage(merged, requested):
        merged.sd.input_format = requested.sd.input_format
        merged.sd.output_format = requested.sd.output_format
        merged.sd.serde_info.serialization_lib = requested.sd.serde_info.serialization_lib
