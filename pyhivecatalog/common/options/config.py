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
from pyhivecatalog.common.options.config_options import ConfigOptions


class CatalogOptions:
    METASTORE = ConfigOptions.key("metastore").string_type().default_value("memory").with_description(
        "Metastore client type, 'memory' or 'rest'")
    URI = ConfigOptions.key("uri").string_type().no_default_value().with_description("Metastore service URI")
    CATALOG_NAME = ConfigOptions.key("catalog-name").string_type().default_value("hive").with_description(
        "Name the catalog is registered under")
    DEFAULT_DATABASE = ConfigOptions.key("default-database").string_type().default_value(
        "default").with_description("Database that must exist when the catalog is opened")
    HIVE_VERSION = ConfigOptions.key("hive-version").string_type().no_default_value().with_description(
        "Metastore version; detected from the service when not set")
    HTTP_MAX_RETRIES = ConfigOptions.key("http.max-retries").int_type().default_value(0).with_description(
        "Retries of idempotent HTTP calls performed by the REST metastore client")
    HTTP_TIMEOUT = ConfigOptions.key("http.timeout").int_type().default_value(180).with_description(
        "Connect and read timeout of the REST metastore client, in seconds")
    PREFIX = ConfigOptions.key("prefix").string_type().no_default_value().with_description(
        "Resource path prefix of the REST metastore service")
    HTTP_HEADER_PREFIX = "header."
