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

from enum import Enum


class AlterDatabaseOp(Enum):
    """Part of a metastore database record an alter is allowed to touch."""
    REPLACE_ALL = "REPLACE_ALL"
    CHANGE_PROPS = "CHANGE_PROPS"
    CHANGE_LOCATION = "CHANGE_LOCATION"
    CHANGE_OWNER = "CHANGE_OWNER"


class AlterTableOp(Enum):
    """Part of a metastore table or partition record an alter is allowed to touch."""
    REPLACE_ALL = "REPLACE_ALL"
    CHANGE_TBL_PROPS = "CHANGE_TBL_PROPS"
    CHANGE_STORAGE = "CHANGE_STORAGE"
    CHANGE_SERDE_PROPS = "CHANGE_SERDE_PROPS"
    CHANGE_LOCATION = "CHANGE_LOCATION"
    CHANGE_COLUMNS = "CHANGE_COLUMNS"


# Legacy property keys carrying the operation inside the object's own properties
ALTER_DATABASE_OP = "alter.database.op"
ALTER_TABLE_OP = "alter.table.op"
