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

from pyhivecatalog.catalog.alter_operation import AlterDatabaseOp, AlterTableOp
from pyhivecatalog.catalog.catalog import Catalog
from pyhivecatalog.catalog.catalog_factory import CatalogFactory
from pyhivecatalog.catalog.database import CatalogDatabase
from pyhivecatalog.catalog.function import CatalogFunction, FunctionLanguage
from pyhivecatalog.catalog.hive.hive_catalog import HiveCatalog
from pyhivecatalog.catalog.partition import (CatalogPartition,
                                             CatalogPartitionSpec)
from pyhivecatalog.catalog.table import CatalogTable, UniqueConstraint
from pyhivecatalog.common.identifier import Identifier
from pyhivecatalog.schema.data_types import (ArrayType, AtomicType, DataField,
                                             DataType, MapType, RowType)

__all__ = [
    "AlterDatabaseOp",
    "AlterTableOp",
    "ArrayType",
    "AtomicType",
    "Catalog",
    "CatalogDatabase",
    "CatalogFactory",
    "CatalogFunction",
    "CatalogPartition",
    "CatalogPartitionSpec",
    "CatalogTable",
    "DataField",
    "DataType",
    "FunctionLanguage",
    "HiveCatalog",
    "Identifier",
    "MapType",
    "RowType",
    "UniqueConstraint",
]
