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


class CatalogPartitionSpec:
    """Ordered mapping from partition column name to its string value."""

    def __init__(self, spec: Dict[str, str]):
        if spec is None:
            raise ValueError("Partition spec cannot be None")
        self.spec = dict(spec)

    def get_spec(self) -> Dict[str, str]:
        return dict(self.spec)

    def keys(self):
        return list(self.spec.keys())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CatalogPartitionSpec):
            return False
        return self.spec == other.spec

    def __hash__(self) -> int:
        return hash(frozenset(self.spec.items()))

    def __repr__(self) -> str:
        return f"CatalogPartitionSpec({self.spec!r})"


class CatalogPartition:
    """
    Partition properties, comment, an optional location and an optional storage format.

    A partition without a storage format is stored in the format of its table.
    """

    def __init__(self, properties: Optional[Dict[str, str]] = None, comment: Optional[str] = None,
                 location: Optional[str] = None, storage_format: Optional[str] = None):
        self.properties = dict(properties or {})
        self.comment = comment
        self.location = location
        self.storage_format = storage_format.upper() if storage_format else None

    def copy(self, properties: Optional[Dict[str, str]] = None) -> 'CatalogPartition':
        return CatalogPartition(dict(self.properties) if properties is None else properties,
                                self.comment, self.location, self.storage_format)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CatalogPartition):
            return False
        return (self.properties == other.properties and
                self.comment == other.comment and
                self.location == other.location and
                self.storage_format == other.storage_format)

    def __repr__(self) -> str:
        return (f"CatalogPartition(properties={self.properties!r}, comment={self.comment!r}, "
                f"location={self.location!r}, storage_format={self.storage_format!r})")
