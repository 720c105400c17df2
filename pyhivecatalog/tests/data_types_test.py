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

import pyarrow as pa
from parameterized import parameterized

from pyhivecatalog.catalog.table import CatalogTable, UniqueConstraint
from pyhivecatalog.schema.data_types import (ArrayType, AtomicType, DataField,
                                             DataTypeParser, MapType,
                                             PyarrowFieldParser, RowType)


class DataTypesTest(unittest.TestCase):
    def test_atomic_type(self):
        self.assertEqual(str(AtomicType("TINYINT", nullable=False)), "TINYINT NOT NULL")
        self.assertEqual(str(AtomicType("DECIMAL(10, 6)")), "DECIMAL(10, 6)")
        self.assertEqual(str(AtomicType("TIMESTAMP(9)")), "TIMESTAMP(9)")
        self.assertEqual(AtomicType("SMALLINT", nullable=False),
                         AtomicType.from_dict(AtomicType("SMALLINT", nullable=False).to_dict()))
        self.assertEqual(AtomicType("INT"), AtomicType.from_dict(AtomicType("INT").to_dict()))

    def test_equality_includes_nullability(self):
        self.assertNotEqual(AtomicType("INT"), AtomicType("INT", nullable=False))
        self.assertEqual(AtomicType("INT").copy(False), AtomicType("INT", nullable=False))
        self.assertNotEqual(DataField("a", AtomicType("INT")), DataField("a", AtomicType("INT", False)))

    def test_type_root(self):
        self.assertEqual(AtomicType("DECIMAL(10, 2)").type_root(), "DECIMAL")
        self.assertEqual(AtomicType("VARCHAR(20) ").type_root(), "VARCHAR")

    @parameterized.expand([
        ("INT",),
        ("BIGINT NOT NULL",),
        ("VARCHAR(20)",),
        ("TIMESTAMP(9) NOT NULL",),
    ])
    def test_parse_atomic(self, type_string):
        self.assertEqual(str(DataTypeParser.parse_data_type(type_string)), type_string)

    def test_parse_unknown_type(self):
        with self.assertRaises(ValueError):
            DataTypeParser.parse_data_type("UNKNOWN_TYPE")

    def test_complex_types(self):
        array = ArrayType(False, AtomicType("STRING"))
        self.assertEqual(str(array), "ARRAY<STRING> NOT NULL")
        self.assertEqual(array, DataTypeParser.parse_data_type(array.to_dict()))

        map_type = MapType(True, AtomicType("STRING", False), AtomicType("TIMESTAMP(9)"))
        self.assertEqual(str(map_type), "MAP<STRING NOT NULL, TIMESTAMP(9)>")
        self.assertEqual(map_type, DataTypeParser.parse_data_type(map_type.to_dict()))

        row = RowType(True, [DataField("a", AtomicType("STRING"), "Someone's desc."),
                             DataField("b", AtomicType("INT", False))])
        self.assertEqual(str(row), "ROW<a: STRING COMMENT Someone's desc., b: INT NOT NULL>")
        self.assertEqual(row, RowType.from_dict(row.to_dict()))


class PyarrowFieldParserTest(unittest.TestCase):
    def test_to_catalog_schema(self):
        pa_schema = pa.schema([
            pa.field('id', pa.int64(), nullable=False),
            ('name', pa.string()),
            ('price', pa.decimal128(10, 2)),
            ('ts', pa.timestamp('ns')),
            ('day', pa.date32()),
            ('tags', pa.list_(pa.string())),
        ])
        fields = PyarrowFieldParser.to_catalog_schema(pa_schema)
        self.assertEqual([str(f.type) for f in fields], [
            "BIGINT NOT NULL", "STRING", "DECIMAL(10, 2)", "TIMESTAMP(9)", "DATE", "ARRAY<STRING>"])

    def test_round_trip_through_catalog_types(self):
        pa_schema = pa.schema([
            pa.field('id', pa.int32(), nullable=False),
            ('score', pa.float64()),
            ('payload', pa.binary()),
            ('attrs', pa.map_(pa.string(), pa.int64())),
        ])
        fields = PyarrowFieldParser.to_catalog_schema(pa_schema)
        self.assertEqual(PyarrowFieldParser.from_catalog_schema(fields), pa_schema)

    def test_unsupported_pyarrow_type(self):
        with self.assertRaises(ValueError):
            PyarrowFieldParser.to_catalog_type(pa.timestamp('us', tz='UTC'), True)

    def test_catalog_table_from_pyarrow_schema(self):
        pa_schema = pa.schema([('id', pa.int64()), ('name', pa.string()), ('dt', pa.string())])
        table = CatalogTable.from_pyarrow_schema(pa_schema, partition_keys=['dt'],
                                                 primary_key=UniqueConstraint("pk", ['id']))
        self.assertFalse(table.get_column('id').type.nullable)
        self.assertEqual(table.partition_keys, ['dt'])
        self.assertEqual(table.to_pyarrow_schema().field('id').nullable, False)


if __name__ == '__main__':
    unittest.main()
