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

import datetime
import unittest

from parameterized import parameterized

from pyhivecatalog.catalog.catalog_exception import (
    CatalogException, ColumnNotExistException, CorruptCatalogObjectException,
    ReservedPropertyException, StatisticsTypeMismatchException,
    UnsupportedConstraintException, UnsupportedStatisticsException)
from pyhivecatalog.catalog.database import CatalogDatabase
from pyhivecatalog.catalog.function import CatalogFunction, FunctionLanguage
from pyhivecatalog.catalog.hive.hive_codec import (STORAGE_FORMATS, HiveCodec,
                                                   is_generic)
from pyhivecatalog.catalog.hive.hive_shim import HiveShimLoader
from pyhivecatalog.catalog.partition import (CatalogPartition,
                                             CatalogPartitionSpec)
from pyhivecatalog.catalog.stats import (CatalogColumnStatisticsDataBoolean,
                                         CatalogColumnStatisticsDataDate,
                                         CatalogColumnStatisticsDataDouble,
                                         CatalogColumnStatisticsDataLong,
                                         CatalogColumnStatisticsDataString)
from pyhivecatalog.catalog.table import CatalogTable, UniqueConstraint
from pyhivecatalog.common.identifier import Identifier
from pyhivecatalog.metastore.model import (DateColumnStatsData,
                                           DecimalColumnStatsData,
                                           FieldSchema, HiveTable,
                                           LongColumnStatsData,
                                           NotNullConstraint)
from pyhivecatalog.schema.data_types import (ArrayType, AtomicType, DataField,
                                             MapType, RowType)


class HiveCodecTest(unittest.TestCase):

    def setUp(self):
        self.codec = HiveCodec(HiveShimLoader.load("3.1.2"))
        self.identifier = Identifier.create("db1", "t1")

    def _native_table(self, primary_key=None, **kwargs):
        columns = [
            DataField("x", AtomicType("INT", nullable=False), "the key"),
            DataField("y", AtomicType("TIMESTAMP(9)", nullable=False)),
            DataField("z", AtomicType("BIGINT")),
        ]
        return CatalogTable(columns, primary_key=primary_key, **kwargs)

    def test_database_round_trip(self):
        database = CatalogDatabase("db1", {"k1": "v1"}, "a comment", "file:/tmp/db1", "alice")
        hive_database = self.codec.encode_database(database)
        self.assertEqual(hive_database.location_uri, "file:/tmp/db1")
        self.assertEqual(hive_database.owner_name, "alice")
        self.assertEqual(self.codec.decode_database(hive_database), database)

    def test_database_rejects_alter_marker(self):
        with self.assertRaises(ReservedPropertyException):
            self.codec.encode_database(CatalogDatabase("db1", {"alter.database.op": "CHANGE_PROPS"}))

    def test_native_table_with_constraints(self):
        table = self._native_table(UniqueConstraint("pk_name", ["x"]), properties={"k": "v"},
                                   comment="a table")
        hive_table = self.codec.encode_table(self.identifier, table)

        self.assertEqual([(col.name, col.type, col.comment) for col in hive_table.sd.cols],
                         [("x", "int", "the key"), ("y", "timestamp", None), ("z", "bigint", None)])
        self.assertEqual(hive_table.parameters, {"k": "v", "comment": "a table"})
        self.assertEqual(hive_table.primary_key.name, "pk_name")
        self.assertEqual(hive_table.primary_key.columns, ["x"])
        self.assertEqual(hive_table.not_null_constraints,
                         [NotNullConstraint("t1_x_nn", "x"), NotNullConstraint("t1_y_nn", "y")])

        decoded = self.codec.decode_table(hive_table)
        self.assertEqual(decoded, table)
        self.assertTrue(decoded.get_column("z").type.nullable)

    def test_constraints_on_old_metastore(self):
        codec = HiveCodec(HiveShimLoader.load("2.3.4"))
        with self.assertRaises(UnsupportedConstraintException):
            codec.encode_table(self.identifier, self._native_table(UniqueConstraint("pk_name", ["x"])))

        with self.assertLogs("HiveCodec", level="WARNING"):
            hive_table = codec.encode_table(self.identifier, self._native_table())
        self.assertEqual(hive_table.not_null_constraints, [])
        self.assertTrue(all(field.type.nullable for field in codec.decode_table(hive_table).columns))

    def test_partition_keys_are_stored_apart(self):
        columns = [DataField("a", AtomicType("STRING")), DataField("dt", AtomicType("STRING")),
                   DataField("hr", AtomicType("INT"))]
        table = CatalogTable(columns, partition_keys=["dt", "hr"])
        hive_table = self.codec.encode_table(self.identifier, table)
        self.assertEqual([col.name for col in hive_table.sd.cols], ["a"])
        self.assertEqual(hive_table.partition_keys, [FieldSchema("dt", "string"), FieldSchema("hr", "int")])
        self.assertEqual(self.codec.decode_table(hive_table), table)

    def test_partition_keys_must_trail(self):
        columns = [DataField("dt", AtomicType("STRING")), DataField("a", AtomicType("STRING"))]
        with self.assertRaises(CatalogException):
            self.codec.encode_table(self.identifier, CatalogTable(columns, partition_keys=["dt"]))

    @parameterized.expand([("comment",), ("is_generic",), ("generic.anything",), ("alter.table.op",)])
    def test_reserved_table_properties(self, key):
        with self.assertRaises(ReservedPropertyException):
            self.codec.encode_table(self.identifier, self._native_table(properties={key: "v"}))

    def test_generic_table_keeps_full_schema(self):
        columns = [
            DataField("id", AtomicType("BIGINT", nullable=False)),
            DataField("tags", MapType(False, AtomicType("STRING", False), ArrayType(True, AtomicType("INT", False)))),
            DataField("nested", RowType(True, [DataField("f", AtomicType("TIME"), "unsupported natively")])),
            DataField("dt", AtomicType("STRING")),
        ]
        table = CatalogTable(columns, partition_keys=["dt"], primary_key=UniqueConstraint("pk", ["id"]),
                             properties={"connector": "kafka"}, comment="generic", generic=True)
        hive_table = self.codec.encode_table(self.identifier, table)

        self.assertTrue(is_generic(hive_table))
        self.assertEqual(hive_table.sd.cols, [])
        self.assertEqual(hive_table.partition_keys, [])
        self.assertEqual(hive_table.parameters["generic.schema.field-count"], "4")
        self.assertEqual(self.codec.decode_table(hive_table), table)

    def test_corrupt_generic_schema(self):
        table = CatalogTable([DataField("a", AtomicType("INT"))], generic=True)
        hive_table = self.codec.encode_table(self.identifier, table)

        broken = HiveTable(db_name="db1", table_name="t1", parameters=dict(hive_table.parameters))
        broken.parameters["generic.schema.field-count"] = "2"
        with self.assertRaises(CorruptCatalogObjectException):
            self.codec.decode_table(broken)

        broken.parameters["generic.schema.field-count"] = "0"
        with self.assertRaises(CorruptCatalogObjectException):
            self.codec.decode_table(broken)

        del broken.parameters["generic.schema.field-count"]
        with self.assertRaises(CorruptCatalogObjectException):
            self.codec.decode_table(broken)

    def test_corrupt_native_table(self):
        hive_table = self.codec.encode_table(self.identifier, self._native_table())
        hive_table.not_null_constraints.append(NotNullConstraint("t1_w_nn", "w"))
        with self.assertRaises(CorruptCatalogObjectException):
            self.codec.decode_table(hive_table)

        hive_table = self.codec.encode_table(self.identifier, self._native_table())
        hive_table.sd.cols[0].type = "uniontype<int,string>"
        with self.assertRaises(CorruptCatalogObjectException):
            self.codec.decode_table(hive_table)

    @parameterized.expand([(name,) for name in sorted(STORAGE_FORMATS)])
    def test_storage_formats(self, name):
        table = self._native_table(storage_format=name.lower())
        hive_table = self.codec.encode_table(self.identifier, table)
        self.assertEqual(hive_table.sd.input_format, STORAGE_FORMATS[name].input_format)
        self.assertEqual(hive_table.sd.serde_info.serialization_lib, STORAGE_FORMATS[name].serde)
        self.assertEqual(self.codec.decode_table(hive_table).storage_format, name)

    def test_unknown_storage_format(self):
        with self.assertRaises(CatalogException):
            self.codec.encode_table(self.identifier, self._native_table(storage_format="CSV"))

        hive_table = self.codec.encode_table(self.identifier, self._native_table())
        hive_table.sd.input_format = "com.example.CustomInputFormat"
        with self.assertLogs("HiveCodec", level="WARNING"):
            self.assertEqual(self.codec.decode_table(hive_table).storage_format, "TEXTFILE")

    def test_partition_follows_table_storage(self):
        columns = [DataField("a", AtomicType("STRING")), DataField("second", AtomicType("STRING")),
                   DataField("third", AtomicType("STRING"))]
        table = CatalogTable(columns, partition_keys=["second", "third"], storage_format="ORC",
                             location="file:/warehouse/t1")
        hive_table = self.codec.encode_table(self.identifier, table)
        spec = CatalogPartitionSpec({"third": "2000", "second": "2010-04-21 09:45:00"})
        partition = CatalogPartition({"k": "v"}, "a partition", "file:/warehouse/t1/p")

        hive_partition = self.codec.encode_partition(hive_table, spec, partition)
        self.assertEqual(hive_partition.values, ["2010-04-21 09:45:00", "2000"])
        self.assertEqual(hive_partition.sd.input_format, STORAGE_FORMATS["ORC"].input_format)
        self.assertEqual(hive_partition.sd.location, "file:/warehouse/t1/p")
        self.assertEqual(hive_partition.parameters, {"k": "v", "comment": "a partition"})
        self.assertEqual(self.codec.partition_name(hive_table, spec), "second=2010-04-21 09%3A45%3A00/third=2000")

        self.assertEqual(self.codec.decode_partition(hive_table, hive_partition), partition)
        self.assertEqual(self.codec.decode_partition_spec(hive_table, hive_partition), spec)

    def test_partition_with_own_storage(self):
        columns = [DataField("a", AtomicType("STRING")), DataField("dt", AtomicType("STRING"))]
        hive_table = self.codec.encode_table(self.identifier, CatalogTable(columns, partition_keys=["dt"]))
        spec = CatalogPartitionSpec({"dt": "2020-01-01"})
        partition = CatalogPartition({"k": "v"}, storage_format="parquet")

        hive_partition = self.codec.encode_partition(hive_table, spec, partition)
        self.assertEqual(hive_partition.sd.input_format, STORAGE_FORMATS["PARQUET"].input_format)
        self.assertEqual(hive_partition.sd.serde_info.serialization_lib, STORAGE_FORMATS["PARQUET"].serde)
        self.assertEqual(hive_partition.sd.cols, hive_table.sd.cols)
        self.assertEqual(self.codec.decode_partition(hive_table, hive_partition), partition)
        self.assertEqual(partition.storage_format, "PARQUET")

        with self.assertRaises(CatalogException):
            self.codec.encode_partition(hive_table, spec, CatalogPartition(storage_format="JSONFILE"))

    @parameterized.expand([
        (FunctionLanguage.JAVA, "com.example.Udf"),
        (FunctionLanguage.SCALA, "com.example.ScalaUdf"),
        (FunctionLanguage.PYTHON, "udfs.my_udf"),
    ])
    def test_function_round_trip(self, language, class_name):
        function = CatalogFunction(class_name, language)
        hive_function = self.codec.encode_function(Identifier.create("db1", "MyFunc"), function)
        self.assertEqual(hive_function.function_name, "myfunc")
        if language == FunctionLanguage.JAVA:
            self.assertEqual(hive_function.class_name, class_name)
        else:
            self.assertEqual(hive_function.class_name, "{}:{}".format(language.value, class_name))
        self.assertEqual(self.codec.decode_function(hive_function), function)

    @parameterized.expand([("PYTHON:udfs.my_udf",), ("SCALA:com.example.ScalaUdf",)])
    def test_java_function_with_language_prefix(self, class_name):
        with self.assertRaises(CatalogException):
            self.codec.encode_function(Identifier.create("db1", "MyFunc"), CatalogFunction(class_name))

        # prefixes are case sensitive
        function = CatalogFunction(class_name.lower())
        hive_function = self.codec.encode_function(Identifier.create("db1", "MyFunc"), function)
        self.assertEqual(self.codec.decode_function(hive_function), function)


class HiveCodecColumnStatisticsTest(unittest.TestCase):

    def setUp(self):
        self.columns = [
            DataField("flag", AtomicType("BOOLEAN")),
            DataField("id", AtomicType("BIGINT")),
            DataField("price", AtomicType("DECIMAL(10, 2)")),
            DataField("name", AtomicType("VARCHAR(20)")),
            DataField("day", AtomicType("DATE")),
        ]

    def test_round_trip(self):
        codec = HiveCodec(HiveShimLoader.load("2.3.4"))
        statistics = {
            "flag": CatalogColumnStatisticsDataBoolean(10, 5, 1),
            "id": CatalogColumnStatisticsDataLong(0, 1000, 0, 900),
            "price": CatalogColumnStatisticsDataDouble(0.5, 99.75, 3, 40),
            "name": CatalogColumnStatisticsDataString(20, 7.5, 2, 100),
            "day": CatalogColumnStatisticsDataDate(datetime.date(2020, 1, 1), datetime.date(2020, 12, 31), 0, 366),
        }
        objs = codec.encode_column_statistics(self.columns, statistics)
        by_name = {obj.col_name: obj for obj in objs}

        self.assertEqual(by_name["price"].col_type, "decimal(10,2)")
        self.assertEqual(by_name["price"].stats_data, DecimalColumnStatsData("0.5", "99.75", 3, 40))
        self.assertEqual(by_name["id"].stats_data, LongColumnStatsData(0, 1000, 0, 900))
        self.assertEqual(by_name["day"].stats_data, DateColumnStatsData(18262, 18627, 0, 366))
        self.assertEqual(codec.decode_column_statistics(objs), statistics)

    def test_unknown_column(self):
        codec = HiveCodec(HiveShimLoader.load("3.1.2"))
        with self.assertRaises(ColumnNotExistException):
            codec.encode_column_statistics(self.columns, {"missing": CatalogColumnStatisticsDataLong(0, 1)})

    @parameterized.expand([
        ("flag", CatalogColumnStatisticsDataLong(0, 1)),
        ("id", CatalogColumnStatisticsDataString(1, 1.0)),
        ("name", CatalogColumnStatisticsDataDate()),
        ("day", CatalogColumnStatisticsDataDouble(0.0, 1.0)),
    ])
    def test_type_mismatch(self, column, data):
        codec = HiveCodec(HiveShimLoader.load("3.1.2"))
        with self.assertRaises(StatisticsTypeMismatchException):
            codec.encode_column_statistics(self.columns, {column: data})

    def test_date_statistics_need_capability(self):
        codec = HiveCodec(HiveShimLoader.load("1.1.0"))
        with self.assertRaises(UnsupportedStatisticsException):
            codec.encode_column_statistics(
                self.columns, {"day": CatalogColumnStatisticsDataDate(datetime.date(2020, 1, 1))})
        # other families are still accepted
        objs = codec.encode_column_statistics(self.columns, {"id": CatalogColumnStatisticsDataLong(1, 2, 0, 2)})
        self.assertEqual(len(objs), 1)


if __name__ == '__main__':
    unittest.main()
