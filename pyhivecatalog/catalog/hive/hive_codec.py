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

import datetime
import json
import logging
from typing import Dict, List, Optional

from pyhivecatalog.catalog.alter_operation import (ALTER_DATABASE_OP,
                                                   ALTER_TABLE_OP)
from pyhivecatalog.catalog.catalog_exception import (
    CatalogException, ColumnNotExistException, CorruptCatalogObjectException,
    ReservedPropertyException, StatisticsTypeMismatchException,
    UnsupportedConstraintException, UnsupportedStatisticsException)
from pyhivecatalog.catalog.database import CatalogDatabase
from pyhivecatalog.catalog.function import CatalogFunction, FunctionLanguage
from pyhivecatalog.catalog.hive.hive_shim import Capability, HiveShim
from pyhivecatalog.catalog.hive.hive_type_util import (from_hive_type,
                                                       to_hive_type,
                                                       type_root)
from pyhivecatalog.catalog.partition import (CatalogPartition,
                                             CatalogPartitionSpec)
from pyhivecatalog.catalog.stats.column_statistics import (
    CatalogColumnStatisticsData, CatalogColumnStatisticsDataBinary,
    CatalogColumnStatisticsDataBoolean, CatalogColumnStatisticsDataDate,
    CatalogColumnStatisticsDataDouble, CatalogColumnStatisticsDataLong,
    CatalogColumnStatisticsDataString)
from pyhivecatalog.catalog.table import CatalogTable, UniqueConstraint
from pyhivecatalog.common.identifier import Identifier
from pyhivecatalog.metastore.model import (BinaryColumnStatsData,
                                           BooleanColumnStatsData,
                                           ColumnStatisticsObj,
                                           DateColumnStatsData,
                                           DecimalColumnStatsData,
                                           DoubleColumnStatsData, FieldSchema,
                                           HiveDatabase, HiveFunction,
                                           HivePartition, HiveTable,
                                           LongColumnStatsData,
                                           NotNullConstraint,
                                           PrimaryKeyConstraint, SerDeInfo,
                                           StorageDescriptor,
                                           StringColumnStatsData,
                                           make_partition_name)
from pyhivecatalog.schema.data_types import (DataField, DataType,
                                             DataTypeParser)

# reserved parameter keys
COMMENT = "comment"
IS_GENERIC = "is_generic"
GENERIC_PREFIX = "generic."
GENERIC_FIELD_COUNT = "generic.schema.field-count"
GENERIC_FIELD_NAME = "generic.schema.{}.name"
GENERIC_FIELD_TYPE = "generic.schema.{}.data-type"
GENERIC_FIELD_DESCRIPTION = "generic.schema.{}.description"
GENERIC_PRIMARY_KEY_NAME = "generic.schema.primary-key.name"
GENERIC_PRIMARY_KEY_COLUMNS = "generic.schema.primary-key.columns"
GENERIC_PARTITION_KEYS = "generic.partition.keys"

SENTINEL_KEYS = (ALTER_DATABASE_OP, ALTER_TABLE_OP)

EPOCH = datetime.date(1970, 1, 1)


class StorageFormat:
    """Hadoop input format, output format and serialization library of a storage format."""

    def __init__(self, name: str, input_format: str, output_format: str, serde: str):
        self.name = name
        self.input_format = input_format
        self.output_format = output_format
        self.serde = serde


_LAZY_SIMPLE_SERDE = "org.apache.hadoop.hive.serde2.lazy.LazySimpleSerDe"

STORAGE_FORMATS = {f.name: f for f in (
    StorageFormat("TEXTFILE",
                  "org.apache.hadoop.mapred.TextInputFormat",
                  "org.apache.hadoop.hive.ql.io.HiveIgnoreKeyTextOutputFormat",
                  _LAZY_SIMPLE_SERDE),
    StorageFormat("SEQUENCEFILE",
                  "org.apache.hadoop.mapred.SequenceFileInputFormat",
                  "org.apache.hadoop.hive.ql.io.HiveSequenceFileOutputFormat",
                  _LAZY_SIMPLE_SERDE),
    StorageFormat("ORC",
                  "org.apache.hadoop.hive.ql.io.orc.OrcInputFormat",
                  "org.apache.hadoop.hive.ql.io.orc.OrcOutputFormat",
                  "org.apache.hadoop.hive.ql.io.orc.OrcSerde"),
    StorageFormat("PARQUET",
                  "org.apache.hadoop.hive.ql.io.parquet.MapredParquetInputFormat",
                  "org.apache.hadoop.hive.ql.io.parquet.MapredParquetOutputFormat",
                  "org.apache.hadoop.hive.ql.io.parquet.serde.ParquetHiveSerDe"),
    StorageFormat("RCFILE",
                  "org.apache.hadoop.hive.ql.io.RCFileInputFormat",
                  "org.apache.hadoop.hive.ql.io.RCFileOutputFormat",
                  "org.apache.hadoop.hive.serde2.columnar.LazyBinaryColumnarSerDe"),
    StorageFormat("AVRO",
                  "org.apache.hadoop.hive.ql.io.avro.AvroContainerInputFormat",
                  "org.apache.hadoop.hive.ql.io.avro.AvroContainerOutputFormat",
                  "org.apache.hadoop.hive.serde2.avro.AvroSerDe"),
)}

# statistics variant -> column type roots it may describe
_STATS_FAMILIES = {
    CatalogColumnStatisticsDataBoolean: ("BOOLEAN",),
    CatalogColumnStatisticsDataLong: ("TINYINT", "SMALLINT", "INT", "BIGINT"),
    CatalogColumnStatisticsDataDouble: ("FLOAT", "DOUBLE", "DECIMAL"),
    CatalogColumnStatisticsDataString: ("CHAR", "VARCHAR", "STRING"),
    CatalogColumnStatisticsDataBinary: ("BYTES", "BINARY", "VARBINARY"),
    CatalogColumnStatisticsDataDate: ("DATE",),
}


def is_reserved_table_key(key: str) -> bool:
    return key in (COMMENT, IS_GENERIC) or key.startswith(GENERIC_PREFIX) or key in SENTINEL_KEYS


def check_table_properties(properties: Dict[str, str]):
    for key in properties:
        if is_reserved_table_key(key):
            raise ReservedPropertyException(key)


def is_generic(hive_table: HiveTable) -> bool:
    return hive_table.parameters.get(IS_GENERIC, "false").lower() == "true"


class HiveCodec:
    """
    Translates catalog objects to metastore records and back.

    Capability dependent decisions consult the shim the codec was created with.
    """

    def __init__(self, shim: HiveShim):
        self.shim = shim
        self.logger = logging.getLogger(self.__class__.__name__)

    # databases

    def encode_database(self, database: CatalogDatabase) -> HiveDatabase:
        for key in database.properties:
            if key in SENTINEL_KEYS:
                raise ReservedPropertyException(key)
        return HiveDatabase(name=database.name, description=database.comment, location_uri=database.location,
                            owner_name=database.owner, parameters=dict(database.properties))

    def decode_database(self, hive_database: HiveDatabase) -> CatalogDatabase:
        return CatalogDatabase(hive_database.name, dict(hive_database.parameters or {}), hive_database.description,
                               hive_database.location_uri, hive_database.owner_name)

    # tables

    def encode_table(self, identifier: Identifier, table: CatalogTable) -> HiveTable:
        check_table_properties(table.properties)
        parameters = dict(table.properties)
        if table.comment is not None:
            parameters[COMMENT] = table.comment
        sd = self.storage_descriptor(table.storage_format, table.location)
        hive_table = HiveTable(db_name=identifier.get_database_name(), table_name=identifier.get_object_name(),
                               sd=sd, parameters=parameters)
        if table.generic:
            parameters[IS_GENERIC] = "true"
            parameters.update(self._encode_generic_schema(table))
            return hive_table

        data_columns = table.data_columns()
        partition_columns = [table.get_column(key) for key in table.partition_keys]
        if table.columns[len(data_columns):] != partition_columns:
            raise CatalogException(
                "Partition keys {} of table {} must be the trailing columns".format(table.partition_keys, identifier))
        sd.cols = [self._field_schema(field) for field in data_columns]
        hive_table.partition_keys = [self._field_schema(field) for field in partition_columns]

        supports_constraints = self.shim.supports(Capability.TABLE_CONSTRAINTS)
        if table.primary_key is not None:
            if not supports_constraints:
                raise UnsupportedConstraintException(table.primary_key.name, self.shim.get_version())
            hive_table.primary_key = PrimaryKeyConstraint(table.primary_key.name, list(table.primary_key.columns))
        for field in table.columns:
            if field.type.nullable:
                continue
            if supports_constraints:
                hive_table.not_null_constraints.append(
                    NotNullConstraint("{}_{}_nn".format(identifier.get_object_name(), field.name), field.name))
            else:
                self.logger.warning("Dropping NOT NULL of column %s in table %s, not supported by Hive %s",
                                    field.name, identifier, self.shim.get_version())
        return hive_table

    def decode_table(self, hive_table: HiveTable) -> CatalogTable:
        name = "{}.{}".format(hive_table.db_name, hive_table.table_name)
        parameters = dict(hive_table.parameters or {})
        generic = parameters.pop(IS_GENERIC, "false").lower() == "true"
        comment = parameters.pop(COMMENT, None)
        storage_format = self._decode_storage_format(name, hive_table.sd)
        location = hive_table.sd.location if hive_table.sd else None

        if generic:
            columns, partition_keys, primary_key = self._decode_generic_schema(name, parameters)
        else:
            columns, partition_keys, primary_key = self._decode_native_schema(name, hive_table)
        # generic schema keys are not user properties
        properties = {key: value for key, value in parameters.items() if not key.startswith(GENERIC_PREFIX)}
        try:
            return CatalogTable(columns, partition_keys, primary_key, properties, comment, generic,
                                storage_format, location)
        except ValueError as e:
            raise CorruptCatalogObjectException(name, str(e)) from e

    def storage_descriptor(self, storage_format: Optional[str], location: Optional[str]) -> StorageDescriptor:
        name = (storage_format or CatalogTable.DEFAULT_STORAGE_FORMAT).upper()
        if name not in STORAGE_FORMATS:
            raise CatalogException("Unknown storage format {}, expected one of {}".format(
                storage_format, sorted(STORAGE_FORMATS)))
        fmt = STORAGE_FORMATS[name]
        return StorageDescriptor(cols=[], location=location, input_format=fmt.input_format,
                                 output_format=fmt.output_format, serde_info=SerDeInfo(fmt.serde, {}))

    def _decode_storage_format(self, name: str, sd: Optional[StorageDescriptor]) -> str:
        if sd is None or sd.input_format is None:
            return CatalogTable.DEFAULT_STORAGE_FORMAT
        serde = sd.serde_info.serialization_lib if sd.serde_info else None
        for fmt in STORAGE_FORMATS.values():
            if fmt.input_format == sd.input_format and (serde is None or fmt.serde == serde):
                return fmt.name
        for fmt in STORAGE_FORMATS.values():
            if fmt.input_format == sd.input_format:
                return fmt.name
        self.logger.warning("Table %s uses unknown input format %s, reported as %s",
                            name, sd.input_format, CatalogTable.DEFAULT_STORAGE_FORMAT)
        return CatalogTable.DEFAULT_STORAGE_FORMAT

    @staticmethod
    def _field_schema(field: DataField) -> FieldSchema:
        return FieldSchema(field.name, to_hive_type(field.type), field.description)

    @staticmethod
    def _decode_field(name: str, field_schema: FieldSchema, nullable: bool) -> DataField:
        try:
            data_type = from_hive_type(field_schema.type)
        except ValueError as e:
            raise CorruptCatalogObjectException(name, str(e)) from e
        return DataField(field_schema.name, data_type.copy(nullable), field_schema.comment)

    def _decode_native_schema(self, name: str, hive_table: HiveTable):
        data_columns = hive_table.sd.cols if hive_table.sd else []
        partition_keys = [fs.name for fs in hive_table.partition_keys or []]
        data_names = [fs.name for fs in data_columns]
        for key in partition_keys:
            if key in data_names:
                raise CorruptCatalogObjectException(name, "partition key {} is also a data column".format(key))

        all_names = data_names + partition_keys
        not_null = set()
        for constraint in hive_table.not_null_constraints or []:
            if constraint.column not in all_names:
                raise CorruptCatalogObjectException(
                    name, "NOT NULL constraint references unknown column {}".format(constraint.column))
            not_null.add(constraint.column)

        columns = [self._decode_field(name, fs, fs.name not in not_null)
                   for fs in list(data_columns) + list(hive_table.partition_keys or [])]

        primary_key = None
        if hive_table.primary_key is not None:
            for column in hive_table.primary_key.columns:
                if column not in all_names:
                    raise CorruptCatalogObjectException(
                        name, "primary key references unknown column {}".format(column))
            try:
                primary_key = UniqueConstraint(hive_table.primary_key.name, hive_table.primary_key.columns)
            except ValueError as e:
                raise CorruptCatalogObjectException(name, str(e)) from e
        return columns, partition_keys, primary_key

    @staticmethod
    def _encode_generic_schema(table: CatalogTable) -> Dict[str, str]:
        schema = {GENERIC_FIELD_COUNT: str(len(table.columns))}
        for i, field in enumerate(table.columns):
            schema[GENERIC_FIELD_NAME.format(i)] = field.name
            schema[GENERIC_FIELD_TYPE.format(i)] = json.dumps(field.type.to_dict())
            if field.description is not None:
                schema[GENERIC_FIELD_DESCRIPTION.format(i)] = field.description
        if table.primary_key is not None:
            schema[GENERIC_PRIMARY_KEY_NAME] = table.primary_key.name
            schema[GENERIC_PRIMARY_KEY_COLUMNS] = json.dumps(table.primary_key.columns)
        if table.partition_keys:
            schema[GENERIC_PARTITION_KEYS] = json.dumps(table.partition_keys)
        return schema

    @staticmethod
    def _decode_generic_schema(name: str, parameters: Dict[str, str]):
        try:
            count = int(parameters[GENERIC_FIELD_COUNT])
        except (KeyError, ValueError) as e:
            raise CorruptCatalogObjectException(name, "generic schema has no valid field count") from e

        columns = []
        for i in range(count):
            field_name = parameters.get(GENERIC_FIELD_NAME.format(i))
            type_json = parameters.get(GENERIC_FIELD_TYPE.format(i))
            if field_name is None or type_json is None:
                raise CorruptCatalogObjectException(name, "generic schema is missing field {}".format(i))
            try:
                data_type = DataTypeParser.parse_data_type(json.loads(type_json))
            except ValueError as e:
                raise CorruptCatalogObjectException(name, "field {}: {}".format(field_name, e)) from e
            columns.append(DataField(field_name, data_type, parameters.get(GENERIC_FIELD_DESCRIPTION.format(i))))

        for key in parameters:
            if key.startswith("generic.schema.") and key.split(".")[2].isdigit() and int(key.split(".")[2]) >= count:
                raise CorruptCatalogObjectException(name, "generic schema key {} exceeds field count".format(key))

        try:
            partition_keys = json.loads(parameters.get(GENERIC_PARTITION_KEYS, "[]"))
            primary_key = None
            if GENERIC_PRIMARY_KEY_NAME in parameters:
                primary_key = UniqueConstraint(parameters[GENERIC_PRIMARY_KEY_NAME],
                                               json.loads(parameters.get(GENERIC_PRIMARY_KEY_COLUMNS, "[]")))
        except ValueError as e:
            raise CorruptCatalogObjectException(name, str(e)) from e
        return columns, partition_keys, primary_key

    # partitions

    @staticmethod
    def partition_values(hive_table: HiveTable, spec: CatalogPartitionSpec) -> List[str]:
        """Values of a full partition spec ordered by the table's partition keys."""
        return [spec.get_spec()[key.name] for key in hive_table.partition_keys]

    def partition_name(self, hive_table: HiveTable, spec: CatalogPartitionSpec) -> str:
        keys = [key.name for key in hive_table.partition_keys]
        return make_partition_name(keys, self.partition_values(hive_table, spec))

    def encode_partition(self, hive_table: HiveTable, spec: CatalogPartitionSpec,
                         partition: CatalogPartition) -> HivePartition:
        check_table_properties(partition.properties)
        parameters = dict(partition.properties)
        if partition.comment is not None:
            parameters[COMMENT] = partition.comment
        table_sd = hive_table.sd
        if partition.storage_format is None:
            sd = StorageDescriptor(cols=[], location=partition.location, input_format=table_sd.input_format,
                                   output_format=table_sd.output_format,
                                   serde_info=SerDeInfo(table_sd.serde_info.serialization_lib, {}))
        else:
            sd = self.storage_descriptor(partition.storage_format, partition.location)
        sd.cols = list(table_sd.cols)
        sd.serde_info.parameters = dict(table_sd.serde_info.parameters)
        return HivePartition(db_name=hive_table.db_name, table_name=hive_table.table_name,
                             values=self.partition_values(hive_table, spec), sd=sd, parameters=parameters)

    def decode_partition(self, hive_table: HiveTable, hive_partition: HivePartition) -> CatalogPartition:
        """Decodes a partition; its storage format is reported only where it differs from the table's."""
        parameters = dict(hive_partition.parameters or {})
        comment = parameters.pop(COMMENT, None)
        sd = hive_partition.sd
        location = sd.location if sd else None
        storage_format = None
        if sd is not None and sd.input_format is not None and not self._same_storage(sd, hive_table.sd):
            name = "{}.{} {}".format(hive_partition.db_name, hive_partition.table_name, hive_partition.values)
            storage_format = self._decode_storage_format(name, sd)
        return CatalogPartition(parameters, comment, location, storage_format)

    @staticmethod
    def _same_storage(sd: StorageDescriptor, table_sd: Optional[StorageDescriptor]) -> bool:
        if table_sd is None:
            return False
        serde = sd.serde_info.serialization_lib if sd.serde_info else None
        table_serde = table_sd.serde_info.serialization_lib if table_sd.serde_info else None
        return sd.input_format == table_sd.input_format and serde == table_serde

    @staticmethod
    def decode_partition_spec(hive_table: HiveTable, hive_partition: HivePartition) -> CatalogPartitionSpec:
        keys = [key.name for key in hive_table.partition_keys]
        return CatalogPartitionSpec(dict(zip(keys, hive_partition.values)))

    # functions

    @staticmethod
    def _language_prefix(language: FunctionLanguage) -> str:
        return language.value + ":"

    @staticmethod
    def encode_function(identifier: Identifier, function: CatalogFunction) -> HiveFunction:
        if function.language == FunctionLanguage.JAVA:
            for language in FunctionLanguage:
                if language != FunctionLanguage.JAVA and \
                        function.class_name.startswith(HiveCodec._language_prefix(language)):
                    raise CatalogException("Class name {} of JAVA function {} clashes with the {} prefix".format(
                        function.class_name, identifier.get_full_name(), language.value))
            class_name = function.class_name
        else:
            class_name = HiveCodec._language_prefix(function.language) + function.class_name
        return HiveFunction(function_name=identifier.get_object_name().lower(),
                            db_name=identifier.get_database_name(), class_name=class_name)

    @staticmethod
    def decode_function(hive_function: HiveFunction) -> CatalogFunction:
        class_name = hive_function.class_name
        for language in FunctionLanguage:
            prefix = HiveCodec._language_prefix(language)
            if language != FunctionLanguage.JAVA and class_name.startswith(prefix):
                return CatalogFunction(class_name[len(prefix):], language)
        return CatalogFunction(class_name, FunctionLanguage.JAVA)

    # column statistics

    def encode_column_statistics(self, columns: List[DataField],
                                 statistics: Dict[str, CatalogColumnStatisticsData],
                                 identifier: Optional[Identifier] = None) -> List[ColumnStatisticsObj]:
        by_name = {field.name: field.type for field in columns}
        result = []
        for column, data in statistics.items():
            if column not in by_name:
                raise ColumnNotExistException(column, identifier)
            data_type = by_name[column]
            self._check_statistics_type(column, data_type, data)
            result.append(ColumnStatisticsObj(column, to_hive_type(data_type),
                                              self._encode_statistics_data(column, data_type, data)))
        return result

    @staticmethod
    def _check_statistics_type(column: str, data_type: DataType, data: CatalogColumnStatisticsData):
        roots = _STATS_FAMILIES.get(type(data), ())
        if type_root(data_type) not in roots:
            raise StatisticsTypeMismatchException(column, data_type, type(data).__name__)

    def _encode_statistics_data(self, column: str, data_type: DataType, data: CatalogColumnStatisticsData):
        if isinstance(data, CatalogColumnStatisticsDataBoolean):
            return BooleanColumnStatsData(data.true_count, data.false_count, data.null_count)
        if isinstance(data, CatalogColumnStatisticsDataLong):
            return LongColumnStatsData(data.min, data.max, data.null_count, data.ndv)
        if isinstance(data, CatalogColumnStatisticsDataDouble):
            if type_root(data_type) == "DECIMAL":
                return DecimalColumnStatsData(None if data.min is None else repr(data.min),
                                              None if data.max is None else repr(data.max),
                                              data.null_count, data.ndv)
            return DoubleColumnStatsData(data.min, data.max, data.null_count, data.ndv)
        if isinstance(data, CatalogColumnStatisticsDataString):
            return StringColumnStatsData(data.max_length, data.avg_length, data.null_count, data.ndv)
        if isinstance(data, CatalogColumnStatisticsDataBinary):
            return BinaryColumnStatsData(data.max_length, data.avg_length, data.null_count)
        if isinstance(data, CatalogColumnStatisticsDataDate):
            if not self.shim.supports(Capability.DATE_COLUMN_STATISTICS):
                raise UnsupportedStatisticsException(column, self.shim.get_version())
            return DateColumnStatsData(None if data.min is None else (data.min - EPOCH).days,
                                       None if data.max is None else (data.max - EPOCH).days,
                                       data.null_count, data.ndv)
        raise CatalogException("Unknown column statistics {}".format(type(data).__name__))

    @staticmethod
    def decode_column_statistics(objs: List[ColumnStatisticsObj]) -> Dict[str, CatalogColumnStatisticsData]:
        return {obj.col_name: HiveCodec._decode_statistics_data(obj.stats_data) for obj in objs}

    @staticmethod
    def _decode_statistics_data(stats) -> CatalogColumnStatisticsData:
        if isinstance(stats, BooleanColumnStatsData):
            return CatalogColumnStatisticsDataBoolean(stats.num_trues, stats.num_falses, stats.num_nulls)
        if isinstance(stats, LongColumnStatsData):
            return CatalogColumnStatisticsDataLong(stats.low_value, stats.high_value, stats.num_nulls, stats.num_dvs)
        if isinstance(stats, DecimalColumnStatsData):
            return CatalogColumnStatisticsDataDouble(None if stats.low_value is None else float(stats.low_value),
                                                     None if stats.high_value is None else float(stats.high_value),
                                                     stats.num_nulls, stats.num_dvs)
        if isinstance(stats, DoubleColumnStatsData):
            return CatalogColumnStatisticsDataDouble(stats.low_value, stats.high_value, stats.num_nulls,
                                                     stats.num_dvs)
        if isinstance(stats, StringColumnStatsData):
            return CatalogColumnStatisticsDataString(stats.max_col_len, stats.avg_col_len, stats.num_nulls,
                                                     stats.num_dvs)
        if isinstance(stats, BinaryColumnStatsData):
            return CatalogColumnStatisticsDataBinary(stats.max_col_len, stats.avg_col_len, stats.num_nulls)
        if isinstance(stats, DateColumnStatsData):
            return CatalogColumnStatisticsDataDate(
                None if stats.low_value is None else EPOCH + datetime.timedelta(days=stats.low_value),
                None if stats.high_value is None else EPOCH + datetime.timedelta(days=stats.high_value),
                stats.num_nulls, stats.num_dvs)
        raise CatalogException("Unknown column statistics record {}".format(type(stats).__name__))
