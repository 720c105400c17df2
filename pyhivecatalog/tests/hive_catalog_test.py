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

from pyhivecatalog import (AlterDatabaseOp, AlterTableOp, CatalogDatabase,
                           CatalogFactory, CatalogFunction, CatalogPartition,
                           CatalogPartitionSpec, CatalogTable, FunctionLanguage,
                           HiveCatalog, Identifier, UniqueConstraint)
from pyhivecatalog.catalog.catalog_exception import (
    CatalogException, ColumnNotExistException, DatabaseAlreadyExistException,
    DatabaseNotEmptyException, DatabaseNotExistException,
    FunctionAlreadyExistException, FunctionNotExistException,
    PartitionAlreadyExistException, PartitionNotExistException,
    PartitionSpecInvalidException, ReservedPropertyException,
    TableAlreadyExistException, TableNotExistException,
    TableNotPartitionedException, TablePartitionedException,
    UnsupportedConstraintException, UnsupportedStatisticsException)
from pyhivecatalog.catalog.stats import (CatalogColumnStatistics,
                                         CatalogColumnStatisticsDataDate,
                                         CatalogColumnStatisticsDataLong,
                                         CatalogColumnStatisticsDataString,
                                         CatalogTableStatistics)
from pyhivecatalog.metastore.memory_metastore_client import \
    MemoryMetastoreClient
from pyhivecatalog.schema.data_types import AtomicType, DataField


class HiveCatalogTestBase(unittest.TestCase):
    hive_version = "3.1.2"

    def setUp(self):
        self.client = MemoryMetastoreClient(self.hive_version)
        self.catalog = HiveCatalog("test_catalog", self.client)
        self.catalog.open()
        self.catalog.create_database(CatalogDatabase("db1", {"k1": "v1"}, "test database"), False)
        self.table_path = Identifier.create("db1", "t1")

    def tearDown(self):
        self.catalog.close()

    @staticmethod
    def create_table(properties=None, comment="test table"):
        columns = [DataField("first", AtomicType("STRING")), DataField("second", AtomicType("INT"))]
        return CatalogTable(columns, properties=properties, comment=comment)

    @staticmethod
    def create_partitioned_table(properties=None):
        columns = [DataField("first", AtomicType("STRING")), DataField("second", AtomicType("STRING")),
                   DataField("third", AtomicType("STRING"))]
        return CatalogTable(columns, partition_keys=["second", "third"], properties=properties,
                            comment="partitioned table")

    @staticmethod
    def create_partition_spec():
        return CatalogPartitionSpec({"second": "2010-04-21 09:45:00", "third": "2000"})


class HiveCatalogOpenTest(unittest.TestCase):

    def test_missing_default_database(self):
        catalog = HiveCatalog("test_catalog", MemoryMetastoreClient(), default_database="missing")
        with self.assertRaises(CatalogException):
            catalog.open()

    def test_not_opened(self):
        catalog = HiveCatalog("test_catalog", MemoryMetastoreClient())
        with self.assertRaises(CatalogException):
            catalog.create_database(CatalogDatabase("db1"), False)

    def test_configured_version_wins(self):
        with HiveCatalog("test_catalog", MemoryMetastoreClient("3.1.2"), hive_version="2.3.4") as catalog:
            self.assertEqual(catalog.shim.get_version(), "2.3.4")

    def test_empty_name(self):
        with self.assertRaises(ValueError):
            HiveCatalog(" ", MemoryMetastoreClient())


class HiveCatalogDatabaseTest(HiveCatalogTestBase):

    def test_create_and_get(self):
        self.assertTrue(self.catalog.database_exists("db1"))
        self.assertEqual(self.catalog.list_databases(), ["db1", "default"])
        self.assertEqual(self.catalog.get_database("db1"), CatalogDatabase("db1", {"k1": "v1"}, "test database"))

        with self.assertRaises(DatabaseAlreadyExistException):
            self.catalog.create_database(CatalogDatabase("db1"), False)
        self.catalog.create_database(CatalogDatabase("db1", {"other": "x"}), True)
        self.assertEqual(self.catalog.get_database("db1").properties, {"k1": "v1"})

        with self.assertRaises(DatabaseNotExistException):
            self.catalog.get_database("nope")

    def test_alter_database_merges_properties(self):
        self.catalog.alter_database(CatalogDatabase("db1", {"k2": "v2", "alter.database.op": "CHANGE_PROPS"}),
                                    False)
        database = self.catalog.get_database("db1")
        self.assertEqual(database.properties, {"k1": "v1", "k2": "v2"})
        self.assertEqual(database.comment, "test database")

    def test_alter_database_replace_all(self):
        self.catalog.alter_database(CatalogDatabase("db1", {"k2": "v2"}, "new comment"), False,
                                    AlterDatabaseOp.REPLACE_ALL)
        self.assertEqual(self.catalog.get_database("db1"), CatalogDatabase("db1", {"k2": "v2"}, "new comment"))

    def test_alter_database_owner_and_location(self):
        self.catalog.alter_database(CatalogDatabase("db1", owner="bob"), False, AlterDatabaseOp.CHANGE_OWNER)
        self.catalog.alter_database(CatalogDatabase("db1", location="file:/db1"), False,
                                    AlterDatabaseOp.CHANGE_LOCATION)
        database = self.catalog.get_database("db1")
        self.assertEqual((database.owner, database.location), ("bob", "file:/db1"))
        self.assertEqual(database.properties, {"k1": "v1"})

    def test_alter_missing_database(self):
        with self.assertRaises(DatabaseNotExistException):
            self.catalog.alter_database(CatalogDatabase("nope"), False)
        self.catalog.alter_database(CatalogDatabase("nope"), True)

    def test_sentinel_value_must_be_known(self):
        with self.assertRaises(ReservedPropertyException):
            self.catalog.alter_database(CatalogDatabase("db1", {"alter.database.op": "RENAME"}), False)
        with self.assertRaises(ReservedPropertyException):
            self.catalog.create_database(CatalogDatabase("db2", {"alter.database.op": "CHANGE_PROPS"}), False)

    def test_drop_database(self):
        self.catalog.create_table(self.table_path, self.create_table(), False)
        with self.assertRaises(DatabaseNotEmptyException):
            self.catalog.drop_database("db1", False)

        self.catalog.drop_database("db1", False, cascade=True)
        self.assertFalse(self.catalog.database_exists("db1"))

        with self.assertRaises(DatabaseNotExistException):
            self.catalog.drop_database("db1", False)
        self.catalog.drop_database("db1", True)

    def test_database_with_function_is_not_empty(self):
        self.catalog.create_function(Identifier.create("db1", "f1"), CatalogFunction("com.example.F"), False)
        with self.assertRaises(DatabaseNotEmptyException):
            self.catalog.drop_database("db1", False)


class HiveCatalogTableTest(HiveCatalogTestBase):

    def test_create_and_get(self):
        table = self.create_table({"k1": "v1"})
        self.catalog.create_table(self.table_path, table, False)
        self.assertTrue(self.catalog.table_exists(self.table_path))
        self.assertTrue(self.catalog.table_exists("db1.t1"))
        self.assertEqual(self.catalog.get_table(self.table_path), table)
        self.assertEqual(self.catalog.list_tables("db1"), ["t1"])

        with self.assertRaises(TableAlreadyExistException):
            self.catalog.create_table(self.table_path, table, False)
        self.catalog.create_table(self.table_path, self.create_table({"k2": "v2"}), True)
        self.assertEqual(self.catalog.get_table(self.table_path), table)

    def test_create_in_missing_database(self):
        with self.assertRaises(DatabaseNotExistException):
            self.catalog.create_table(Identifier.create("nope", "t1"), self.create_table(), False)
        with self.assertRaises(DatabaseNotExistException):
            self.catalog.list_tables("nope")

    def test_get_missing_table(self):
        with self.assertRaises(TableNotExistException):
            self.catalog.get_table(self.table_path)
        self.assertFalse(self.catalog.table_exists(self.table_path))

    def test_constraints(self):
        columns = [DataField("x", AtomicType("INT", nullable=False)),
                   DataField("y", AtomicType("TIMESTAMP(9)", nullable=False)),
                   DataField("z", AtomicType("BIGINT"))]
        table = CatalogTable(columns, primary_key=UniqueConstraint("pk_name", ["x"]))
        self.catalog.create_table(self.table_path, table, False)

        stored = self.catalog.get_table(self.table_path)
        self.assertEqual(stored.primary_key, UniqueConstraint("pk_name", ["x"]))
        self.assertEqual([f.type.nullable for f in stored.columns], [False, False, True])
        self.assertEqual(stored, table)

    def test_generic_table(self):
        columns = [DataField("ts", AtomicType("TIMESTAMP(3)", nullable=False)), DataField("v", AtomicType("TIME"))]
        table = CatalogTable(columns, properties={"connector": "datagen"}, comment="generic", generic=True)
        self.catalog.create_table(self.table_path, table, False)
        self.assertEqual(self.catalog.get_table(self.table_path), table)

        self.catalog.alter_table(self.table_path, table.copy({"rows-per-second": "10"}), False,
                                 AlterTableOp.CHANGE_TBL_PROPS)
        self.assertEqual(self.catalog.get_table(self.table_path).properties,
                         {"connector": "datagen", "rows-per-second": "10"})
        with self.assertRaises(CatalogException):
            self.catalog.alter_table(self.table_path, self.create_table(), False)

    def test_alter_table(self):
        self.catalog.create_table(self.table_path, self.create_table({"k1": "v1"}), False)

        self.catalog.alter_table(self.table_path, self.create_table({"k2": "v2"}, "new comment"), False)
        altered = self.catalog.get_table(self.table_path)
        self.assertEqual(altered.properties, {"k2": "v2"})
        self.assertEqual(altered.comment, "new comment")

        tagged = self.create_table({"k3": "v3", "alter.table.op": "CHANGE_TBL_PROPS"})
        self.catalog.alter_table(self.table_path, tagged, False)
        altered = self.catalog.get_table(self.table_path)
        self.assertEqual(altered.properties, {"k2": "v2", "k3": "v3"})
        self.assertEqual(altered.comment, "new comment")

    def test_alter_table_columns(self):
        self.catalog.create_table(self.table_path, self.create_table(), False)
        columns = [DataField("first", AtomicType("STRING")), DataField("third", AtomicType("DOUBLE"))]
        self.catalog.alter_table(self.table_path, CatalogTable(columns, properties={"ignored": "x"}), False,
                                 AlterTableOp.CHANGE_COLUMNS)
        altered = self.catalog.get_table(self.table_path)
        self.assertEqual(altered.column_names(), ["first", "third"])
        self.assertEqual(altered.comment, "test table")
        self.assertEqual(altered.properties, {})

    def test_alter_missing_table(self):
        with self.assertRaises(TableNotExistException):
            self.catalog.alter_table(self.table_path, self.create_table(), False)
        self.catalog.alter_table(self.table_path, self.create_table(), True)

    def test_rename_table(self):
        self.catalog.create_table(self.table_path, self.create_table(), False)
        self.catalog.rename_table(self.table_path, "t2", False)
        self.assertFalse(self.catalog.table_exists(self.table_path))
        self.assertEqual(self.catalog.get_table("db1.t2"), self.create_table())

        self.catalog.create_table(self.table_path, self.create_table(), False)
        with self.assertRaises(TableAlreadyExistException):
            self.catalog.rename_table(self.table_path, "t2", False)

        with self.assertRaises(TableNotExistException):
            self.catalog.rename_table(Identifier.create("db1", "nope"), "t3", False)
        self.catalog.rename_table(Identifier.create("db1", "nope"), "t3", True)

    def test_drop_table(self):
        self.catalog.create_table(self.table_path, self.create_table(), False)
        self.catalog.drop_table(self.table_path, False)
        self.assertFalse(self.catalog.table_exists(self.table_path))
        with self.assertRaises(TableNotExistException):
            self.catalog.drop_table(self.table_path, False)
        self.catalog.drop_table(self.table_path, True)


class HiveCatalogConstraintsOnOldMetastoreTest(HiveCatalogTestBase):
    hive_version = "2.3.4"

    def test_primary_key_rejected(self):
        columns = [DataField("x", AtomicType("INT", nullable=False))]
        with self.assertRaises(UnsupportedConstraintException):
            self.catalog.create_table(self.table_path,
                                      CatalogTable(columns, primary_key=UniqueConstraint("pk_name", ["x"])), False)
        self.assertFalse(self.catalog.table_exists(self.table_path))


class HiveCatalogPartitionTest(HiveCatalogTestBase):

    def setUp(self):
        super().setUp()
        self.catalog.create_table(self.table_path, self.create_partitioned_table(), False)

    def test_create_and_get(self):
        spec = self.create_partition_spec()
        partition = CatalogPartition({"k": "v"}, "Hive partition")
        self.catalog.create_partition(self.table_path, spec, partition, False)

        self.assertTrue(self.catalog.partition_exists(self.table_path, spec))
        self.assertEqual(self.catalog.get_partition(self.table_path, spec), partition)
        self.assertEqual(self.catalog.list_partitions(self.table_path), [spec])

        with self.assertRaises(PartitionAlreadyExistException):
            self.catalog.create_partition(self.table_path, spec, partition, False)
        self.catalog.create_partition(self.table_path, spec, partition, True)

    def test_list_partitions_with_partial_spec(self):
        for second, third in (("a", "1"), ("a", "2"), ("b", "1")):
            self.catalog.create_partition(self.table_path, CatalogPartitionSpec({"second": second, "third": third}),
                                          CatalogPartition(), False)
        self.assertEqual(
            self.catalog.list_partitions(self.table_path, CatalogPartitionSpec({"second": "a"})),
            [CatalogPartitionSpec({"second": "a", "third": "1"}), CatalogPartitionSpec({"second": "a", "third": "2"})])
        self.assertEqual(self.catalog.list_partitions(self.table_path, CatalogPartitionSpec({"third": "3"})), [])
        with self.assertRaises(PartitionSpecInvalidException):
            self.catalog.list_partitions(self.table_path, CatalogPartitionSpec({"first": "a"}))

    def test_invalid_spec(self):
        spec = CatalogPartitionSpec({"second": "2010-04-21 09:45:00"})
        with self.assertRaises(PartitionSpecInvalidException):
            self.catalog.create_partition(self.table_path, spec, CatalogPartition(), False)
        with self.assertRaises(PartitionSpecInvalidException):
            self.catalog.get_partition(self.table_path, spec)
        self.assertFalse(self.catalog.partition_exists(self.table_path, spec))

    def test_table_not_partitioned(self):
        path = Identifier.create("db1", "plain")
        self.catalog.create_table(path, self.create_table(), False)
        with self.assertRaises(TableNotPartitionedException):
            self.catalog.create_partition(path, CatalogPartitionSpec({"second": "1"}), CatalogPartition(), False)
        with self.assertRaises(TableNotPartitionedException):
            self.catalog.list_partitions(path)

    def test_alter_partition(self):
        spec = self.create_partition_spec()
        self.catalog.create_partition(self.table_path, spec, CatalogPartition({"k": "v"}, "Hive partition"), False)

        self.catalog.alter_partition(self.table_path, spec, CatalogPartition({"k": "v1"}), False,
                                     AlterTableOp.CHANGE_TBL_PROPS)
        self.assertEqual(self.catalog.get_partition(self.table_path, spec),
                         CatalogPartition({"k": "v1"}, "Hive partition"))

        self.catalog.alter_partition(self.table_path, spec,
                                     CatalogPartition({"alter.table.op": "CHANGE_LOCATION"}, location="file:/p"),
                                     False)
        self.assertEqual(self.catalog.get_partition(self.table_path, spec).location, "file:/p")

        self.catalog.alter_partition(self.table_path, spec, CatalogPartition({"a": "b"}, storage_format="orc"), False,
                                     AlterTableOp.CHANGE_STORAGE)
        self.assertEqual(self.catalog.get_partition(self.table_path, spec),
                         CatalogPartition({"k": "v1"}, "Hive partition", "file:/p", "ORC"))
        self.assertEqual(self.catalog.get_table(self.table_path).storage_format, "TEXTFILE")

        with self.assertRaises(CatalogException):
            self.catalog.alter_partition(self.table_path, spec, CatalogPartition(), False,
                                         AlterTableOp.CHANGE_COLUMNS)

    def test_alter_missing_partition(self):
        spec = self.create_partition_spec()
        with self.assertRaises(PartitionNotExistException):
            self.catalog.alter_partition(self.table_path, spec, CatalogPartition(), False)
        self.catalog.alter_partition(self.table_path, spec, CatalogPartition(), True)

    def test_drop_partition(self):
        spec = self.create_partition_spec()
        self.catalog.create_partition(self.table_path, spec, CatalogPartition(), False)
        self.catalog.drop_partition(self.table_path, spec, False)
        self.assertFalse(self.catalog.partition_exists(self.table_path, spec))
        with self.assertRaises(PartitionNotExistException):
            self.catalog.drop_partition(self.table_path, spec, False)
        self.catalog.drop_partition(self.table_path, spec, True)

    def test_partition_statistics(self):
        spec = self.create_partition_spec()
        self.catalog.create_partition(self.table_path, spec, CatalogPartition(), False)
        self.assertEqual(self.catalog.get_partition_statistics(self.table_path, spec),
                         CatalogTableStatistics.UNKNOWN)

        statistics = CatalogTableStatistics(10, 1, 1024, 2048)
        self.catalog.alter_partition_statistics(self.table_path, spec, statistics, False)
        self.assertEqual(self.catalog.get_partition_statistics(self.table_path, spec), statistics)
        self.assertEqual(self.catalog.get_table_statistics(self.table_path), CatalogTableStatistics.UNKNOWN)

        column_statistics = CatalogColumnStatistics({"first": CatalogColumnStatisticsDataString(10, 5.0, 0, 8)})
        self.catalog.alter_partition_column_statistics(self.table_path, spec, column_statistics, False)
        self.assertEqual(self.catalog.get_partition_column_statistics(self.table_path, spec), column_statistics)

        with self.assertRaises(ColumnNotExistException):
            self.catalog.alter_partition_column_statistics(
                self.table_path, spec, CatalogColumnStatistics({"second": CatalogColumnStatisticsDataString()}),
                False)

    def test_table_statistics_of_partitioned_table(self):
        with self.assertRaises(TablePartitionedException):
            self.catalog.alter_table_statistics(self.table_path, CatalogTableStatistics(5), False)
        self.assertEqual(self.catalog.get_table_statistics(self.table_path), CatalogTableStatistics.UNKNOWN)

    def test_table_column_statistics_of_partitioned_table(self):
        with self.assertRaises(TablePartitionedException):
            self.catalog.alter_table_column_statistics(
                self.table_path, CatalogColumnStatistics({"first": CatalogColumnStatisticsDataString(10, 5.2, 3, 100)}),
                False)
        self.assertTrue(self.catalog.get_table_column_statistics(self.table_path).is_empty())


class HiveCatalogFunctionTest(HiveCatalogTestBase):

    def test_function_lifecycle(self):
        path = Identifier.create("db1", "MyUdf")
        function = CatalogFunction("com.example.MyUdf")
        self.catalog.create_function(path, function, False)

        self.assertTrue(self.catalog.function_exists(path))
        self.assertTrue(self.catalog.function_exists("db1.myudf"))
        self.assertEqual(self.catalog.get_function(path), function)
        self.assertEqual(self.catalog.list_functions("db1"), ["myudf"])

        with self.assertRaises(FunctionAlreadyExistException):
            self.catalog.create_function(path, function, False)
        self.catalog.create_function(path, function, True)

        altered = CatalogFunction("udfs.my_udf", FunctionLanguage.PYTHON)
        self.catalog.alter_function(path, altered, False)
        self.assertEqual(self.catalog.get_function(path), altered)

        self.catalog.drop_function(path, False)
        self.assertFalse(self.catalog.function_exists(path))
        with self.assertRaises(FunctionNotExistException):
            self.catalog.drop_function(path, False)
        self.catalog.drop_function(path, True)

    def test_missing_function(self):
        path = Identifier.create("db1", "nope")
        with self.assertRaises(FunctionNotExistException):
            self.catalog.get_function(path)
        with self.assertRaises(FunctionNotExistException):
            self.catalog.alter_function(path, CatalogFunction("com.example.F"), False)
        self.catalog.alter_function(path, CatalogFunction("com.example.F"), True)
        with self.assertRaises(DatabaseNotExistException):
            self.catalog.create_function(Identifier.create("nope", "f"), CatalogFunction("com.example.F"), False)


class HiveCatalogStatisticsTest(HiveCatalogTestBase):

    @parameterized.expand([(0, -1), (1, 1), (1000, 1000)])
    def test_statistics_from_properties(self, input_stat, expected_stat):
        properties = {key: str(input_stat) for key in ("numRows", "numFiles", "totalSize", "rawDataSize")}
        self.catalog.create_table(self.table_path, self.create_table(properties), False)
        statistics = self.catalog.get_table_statistics(self.table_path)
        self.assertEqual(statistics, CatalogTableStatistics(expected_stat, expected_stat, expected_stat,
                                                            expected_stat))

    def test_alter_table_statistics(self):
        self.catalog.create_table(self.table_path, self.create_table(), False)
        self.assertEqual(self.catalog.get_table_statistics(self.table_path), CatalogTableStatistics.UNKNOWN)

        statistics = CatalogTableStatistics(0, 0, 0, 0)
        self.catalog.alter_table_statistics(self.table_path, statistics, False)
        self.assertEqual(self.catalog.get_table_statistics(self.table_path), statistics)
        self.assertEqual(self.client.get_table("db1", "t1").parameters["COLUMN_STATS_ACCURATE"],
                         '{"BASIC_STATS":"true"}')

        self.catalog.alter_table_statistics(self.table_path, CatalogTableStatistics.UNKNOWN, False)
        self.assertEqual(self.catalog.get_table_statistics(self.table_path), CatalogTableStatistics.UNKNOWN)
        self.assertNotIn("COLUMN_STATS_ACCURATE", self.client.get_table("db1", "t1").parameters)

    def test_statistics_of_missing_table(self):
        with self.assertRaises(TableNotExistException):
            self.catalog.get_table_statistics(self.table_path)
        with self.assertRaises(TableNotExistException):
            self.catalog.alter_table_statistics(self.table_path, CatalogTableStatistics(1), False)
        self.catalog.alter_table_statistics(self.table_path, CatalogTableStatistics(1), True)
        self.catalog.alter_table_column_statistics(self.table_path, CatalogColumnStatistics(), True)

    def test_table_column_statistics(self):
        self.catalog.create_table(self.table_path, self.create_table(), False)
        self.assertTrue(self.catalog.get_table_column_statistics(self.table_path).is_empty())

        first = CatalogColumnStatistics({"first": CatalogColumnStatisticsDataString(10, 5.5, 1, 7)})
        self.catalog.alter_table_column_statistics(self.table_path, first, False)
        second = CatalogColumnStatistics({"second": CatalogColumnStatisticsDataLong(-10, 10, 0, 21)})
        self.catalog.alter_table_column_statistics(self.table_path, second, False)

        merged = dict(first.get_column_statistics_data())
        merged.update(second.get_column_statistics_data())
        self.assertEqual(self.catalog.get_table_column_statistics(self.table_path),
                         CatalogColumnStatistics(merged))

        with self.assertRaises(ColumnNotExistException):
            self.catalog.alter_table_column_statistics(
                self.table_path, CatalogColumnStatistics({"nope": CatalogColumnStatisticsDataLong()}), False)


class HiveCatalogDateStatisticsTest(HiveCatalogTestBase):
    hive_version = "1.1.0"

    def test_date_statistics_rejected(self):
        columns = [DataField("d", AtomicType("DATE")), DataField("n", AtomicType("BIGINT"))]
        self.catalog.create_table(self.table_path, CatalogTable(columns), False)
        date_stats = CatalogColumnStatistics(
            {"d": CatalogColumnStatisticsDataDate(datetime.date(2020, 1, 1), datetime.date(2020, 2, 1), 0, 31)})
        with self.assertRaises(UnsupportedStatisticsException):
            self.catalog.alter_table_column_statistics(self.table_path, date_stats, False)

        long_stats = CatalogColumnStatistics({"n": CatalogColumnStatisticsDataLong(1, 5, 0, 5)})
        self.catalog.alter_table_column_statistics(self.table_path, long_stats, False)
        self.assertEqual(self.catalog.get_table_column_statistics(self.table_path), long_stats)

    def test_old_stats_marker(self):
        self.catalog.create_table(self.table_path, self.create_table(), False)
        self.catalog.alter_table_statistics(self.table_path, CatalogTableStatistics(3, 1, 30, 60), False)
        self.assertEqual(self.client.get_table("db1", "t1").parameters["COLUMN_STATS_ACCURATE"], "true")


class CatalogFactoryTest(unittest.TestCase):

    def test_memory_metastore(self):
        catalog = CatalogFactory.create({"metastore": "memory", "catalog-name": "my_hive"})
        self.assertIsInstance(catalog, HiveCatalog)
        self.assertEqual(catalog.name, "my_hive")
        self.assertEqual(catalog.list_databases(), ["default"])
        catalog.close()

    def test_hive_version_option(self):
        catalog = CatalogFactory.create({"hive-version": "2.1.1"})
        self.assertEqual(catalog.shim.get_version(), "2.1.1")

    def test_unknown_metastore(self):
        with self.assertRaises(ValueError):
            CatalogFactory.create({"metastore": "thrift"})

    def test_missing_default_database(self):
        with self.assertRaises(CatalogException):
            CatalogFactory.create({"default-database": "missing"})


if __name__ == '__main__':
    unittest.main()
