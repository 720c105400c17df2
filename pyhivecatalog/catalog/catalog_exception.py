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

from typing import Dict, Optional

from pyhivecatalog.common.identifier import Identifier


# Exception classes
class CatalogException(Exception):
    """Base catalog exception"""


class ObjectNotExistException(CatalogException):
    """Base of the not exist exceptions"""


class ObjectAlreadyExistException(CatalogException):
    """Base of the already exist exceptions"""


class DatabaseNotExistException(ObjectNotExistException):
    """Database not exist exception"""

    def __init__(self, database: str):
        self.database = database
        super().__init__(f"Database {database} does not exist")


class DatabaseAlreadyExistException(ObjectAlreadyExistException):
    """Database already exist exception"""

    def __init__(self, database: str):
        self.database = database
        super().__init__(f"Database {database} already exists")


class DatabaseNotEmptyException(CatalogException):
    """Database not empty exception"""

    def __init__(self, database: str):
        self.database = database
        super().__init__(f"Database {database} is not empty")


class TableNotExistException(ObjectNotExistException):
    """Table not exist exception"""

    def __init__(self, identifier: Identifier):
        self.identifier = identifier
        super().__init__(f"Table {identifier.get_full_name()} does not exist")


class TableAlreadyExistException(ObjectAlreadyExistException):
    """Table already exist exception"""

    def __init__(self, identifier: Identifier):
        self.identifier = identifier
        super().__init__(f"Table {identifier.get_full_name()} already exists")


class TableNotPartitionedException(CatalogException):
    """Table not partitioned exception"""

    def __init__(self, identifier: Identifier):
        self.identifier = identifier
        super().__init__(f"Table {identifier.get_full_name()} is not partitioned")


class TablePartitionedException(CatalogException):
    """Table partitioned exception"""

    def __init__(self, identifier: Identifier):
        self.identifier = identifier
        super().__init__(f"Table {identifier.get_full_name()} is partitioned, its statistics are kept per partition")


class PartitionNotExistException(ObjectNotExistException):
    """Partition not exist exception"""

    def __init__(self, identifier: Identifier, spec: Dict[str, str]):
        self.identifier = identifier
        self.spec = spec
        super().__init__(f"Partition {spec} of table {identifier.get_full_name()} does not exist")


class PartitionAlreadyExistException(ObjectAlreadyExistException):
    """Partition already exist exception"""

    def __init__(self, identifier: Identifier, spec: Dict[str, str]):
        self.identifier = identifier
        self.spec = spec
        super().__init__(f"Partition {spec} of table {identifier.get_full_name()} already exists")


class PartitionSpecInvalidException(CatalogException):
    """Partition spec invalid exception"""

    def __init__(self, identifier: Identifier, partition_keys, spec: Dict[str, str]):
        self.identifier = identifier
        self.partition_keys = list(partition_keys)
        self.spec = spec
        super().__init__(
            f"Partition spec {spec} is invalid for table {identifier.get_full_name()} "
            f"partitioned by {self.partition_keys}")


class FunctionNotExistException(ObjectNotExistException):
    """Function not exist exception"""

    def __init__(self, identifier: Identifier):
        self.identifier = identifier
        super().__init__(f"Function {identifier.get_full_name()} does not exist")


class FunctionAlreadyExistException(ObjectAlreadyExistException):
    """Function already exist exception"""

    def __init__(self, identifier: Identifier):
        self.identifier = identifier
        super().__init__(f"Function {identifier.get_full_name()} already exists")


class ColumnNotExistException(CatalogException):
    """Column not exist exception"""

    def __init__(self, column: str, identifier: Optional[Identifier] = None):
        self.column = column
        self.identifier = identifier
        where = f" in table {identifier.get_full_name()}" if identifier else ""
        super().__init__(f"Column {column} does not exist{where}")


class ReservedPropertyException(CatalogException):
    """A user property uses a key reserved for catalog bookkeeping"""

    def __init__(self, key: str, message: Optional[str] = None):
        self.key = key
        super().__init__(message or f"Property key {key} is reserved")


class UnsupportedConstraintException(CatalogException):
    """The metastore version cannot store the requested constraint"""

    def __init__(self, constraint: str, version: str):
        self.constraint = constraint
        self.version = version
        super().__init__(f"Constraint {constraint} is not supported by Hive {version}")


class UnsupportedStatisticsException(CatalogException):
    """The metastore version cannot store the requested statistics"""

    def __init__(self, column: str, version: str):
        self.column = column
        self.version = version
        super().__init__(f"Statistics of column {column} are not supported by Hive {version}")


class UnsupportedDataTypeException(CatalogException):
    """Unsupported data type exception"""

    def __init__(self, data_type, reason: Optional[str] = None):
        self.data_type = data_type
        suffix = f": {reason}" if reason else ""
        super().__init__(f"Data type {data_type} cannot be stored in the metastore{suffix}")


class StatisticsTypeMismatchException(CatalogException):
    """Column statistics do not fit the declared column type"""

    def __init__(self, column: str, column_type, statistics_type: str):
        self.column = column
        self.column_type = column_type
        self.statistics_type = statistics_type
        super().__init__(
            f"Statistics {statistics_type} do not match type {column_type} of column {column}")


class CorruptCatalogObjectException(CatalogException):
    """A metastore record cannot be decoded into a catalog object"""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Metastore record {name} is corrupt: {reason}")


class VersionDetectionException(CatalogException):
    """Metastore version detection exception"""

    def __init__(self, version: Optional[str], reason: Optional[str] = None):
        self.version = version
        suffix = f": {reason}" if reason else ""
        super().__init__(f"Cannot determine Hive metastore version from {version!r}{suffix}")
