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

from abc import ABC
from dataclasses import dataclass
from typing import List, Optional

from pyhivecatalog.common.json_util import json_field
from pyhivecatalog.metastore.model import (ColumnStatisticsObj,
                                           HivePartition)


class RESTResponse(ABC):
    pass


@dataclass
class ErrorResponse(RESTResponse):
    RESOURCE_TYPE_DATABASE = "database"
    RESOURCE_TYPE_TABLE = "table"
    RESOURCE_TYPE_PARTITION = "partition"
    RESOURCE_TYPE_FUNCTION = "function"

    resource_type: Optional[str] = json_field("resourceType", default=None)
    resource_name: Optional[str] = json_field("resourceName", default=None)
    message: Optional[str] = json_field("message", default=None)
    code: Optional[int] = json_field("code", default=None)


@dataclass
class VersionResponse(RESTResponse):
    version: str = json_field("version", default=None)


@dataclass
class ListDatabasesResponse(RESTResponse):
    FIELD_DATABASES = "databases"

    databases: List[str] = json_field(FIELD_DATABASES, default_factory=list)


@dataclass
class ListTablesResponse(RESTResponse):
    FIELD_TABLES = "tables"

    tables: List[str] = json_field(FIELD_TABLES, default_factory=list)


@dataclass
class ListFunctionsResponse(RESTResponse):
    FIELD_FUNCTIONS = "functions"

    functions: List[str] = json_field(FIELD_FUNCTIONS, default_factory=list)


@dataclass
class ListPartitionsResponse(RESTResponse):
    FIELD_PARTITIONS = "partitions"

    partitions: List[HivePartition] = json_field(FIELD_PARTITIONS, default_factory=list)


@dataclass
class ColumnStatisticsResponse(RESTResponse):
    FIELD_COLUMN_STATISTICS = "columnStatistics"

    column_statistics: List[ColumnStatisticsObj] = json_field(FIELD_COLUMN_STATISTICS, default_factory=list)
