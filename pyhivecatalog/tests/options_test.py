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

import unittest

from parameterized import parameterized

from pyhivecatalog.common.options import ConfigOptions, Options
from pyhivecatalog.common.options.config import CatalogOptions


class OptionsTest(unittest.TestCase):

    def test_defaults(self):
        options = Options({})
        self.assertEqual(options.get(CatalogOptions.METASTORE), "memory")
        self.assertEqual(options.get(CatalogOptions.HTTP_TIMEOUT), 180)
        self.assertIsNone(options.get(CatalogOptions.URI))
        self.assertEqual(options.get(CatalogOptions.URI, "http://localhost:9083"), "http://localhost:9083")

    @parameterized.expand([("3", 3), (" 5 ", 5), (7, 7), (2.0, 2)])
    def test_int_option(self, raw, expected):
        self.assertEqual(Options({"http.max-retries": raw}).get(CatalogOptions.HTTP_MAX_RETRIES), expected)

    def test_invalid_int_option(self):
        with self.assertRaises(ValueError):
            Options({"http.timeout": "soon"}).get(CatalogOptions.HTTP_TIMEOUT)
        with self.assertRaises(ValueError):
            Options({"http.timeout": [1]}).get(CatalogOptions.HTTP_TIMEOUT)

    def test_string_option_from_number(self):
        self.assertEqual(Options({"hive-version": 3}).get(CatalogOptions.HIVE_VERSION), "3")

    def test_extract_prefix_map(self):
        options = Options({"header.x-request-id": "r1", "header.x-user": "alice", "uri": "http://h"})
        self.assertEqual(options.extract_prefix_map(CatalogOptions.HTTP_HEADER_PREFIX),
                         {"x-request-id": "r1", "x-user": "alice"})

    def test_option_description(self):
        option = ConfigOptions.key("k").string_type().default_value("v").with_description("a key")
        self.assertEqual((option.key(), option.default_value(), option.description()), ("k", "v", "a key"))
        with self.assertRaises(ValueError):
            ConfigOptions.key("")


if __name__ == '__main__':
    unittest.main()
