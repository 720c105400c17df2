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

import json
import urllib.parse
from typing import List


class RESTUtil:
    @staticmethod
    def encode_string(value: str) -> str:
        return urllib.parse.quote(value, safe="")

    @staticmethod
    def decode_string(encoded: str) -> str:
        """Decode URL-encoded string"""
        return urllib.parse.unquote(encoded)

    @staticmethod
    def encode_values(values: List[str]) -> str:
        """Encodes partition values into a single path segment."""
        return RESTUtil.encode_string(json.dumps(list(values)))

    @staticmethod
    def decode_values(encoded: str) -> List[str]:
        return json.loads(RESTUtil.decode_string(encoded))

