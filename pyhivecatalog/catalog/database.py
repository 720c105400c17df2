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


class CatalogDatabase:
    """Structure of a Database."""

    def __init__(self, name: str, properties: Optional[Dict[str, str]] = None, comment: Optional[str] = None,
                 location: Optional[str] = None, owner: Optional[str] = None):
        if not name or not name.strip():
            raise ValueError("Database name cannot be empty")
        self.name = name
        self.properties = dict(properties or {})
        self.comment = comment
        self.location = location
        self.owner = owner

    def copy(self, properties: Optional[Dict[str, str]] = None) -> 'CatalogDatabase':
        return CatalogDatabase(self.name,
                               dict(self.properties) if properties is None else properties,
                               self.comment, self.location, self.owner)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CatalogDatabase):
            return False
        return (self.name == other.name and
                self.properties == other.properties and
                self.comment == other.comment and
                self.location == other.location and
                self.owner == other.owner)

    def __repr__(self) -> str:
        return (f"CatalogDatabase(name={self.name!r}, properties={self.properties!r}, "
                f"comment={self.comment!r}, location={self.location!r}, owner={self.owner!r})")
