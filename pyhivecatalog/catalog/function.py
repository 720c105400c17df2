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


class FunctionLanguage(Enum):
    JAVA = "JAVA"
    SCALA = "SCALA"
    PYTHON = "PYTHON"


class CatalogFunction:
    """A user defined function: the implementing class and its language."""

    def __init__(self, class_name: str, language: FunctionLanguage = FunctionLanguage.JAVA):
        if not class_name or not class_name.strip():
            raise ValueError("Function class name cannot be empty")
        self.class_name = class_name
        self.language = language

    def copy(self) -> 'CatalogFunction':
        return CatalogFunction(self.class_name, self.language)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CatalogFunction):
            return False
        return self.class_name == other.class_name and self.language == other.language

    def __repr__(self) -> str:
        return f"CatalogFunction(class_name={self.class_name!r}, language={self.language})"
