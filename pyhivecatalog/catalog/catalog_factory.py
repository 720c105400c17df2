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

from typing import Dict

from pyhivecatalog.catalog.catalog import Catalog
from pyhivecatalog.catalog.hive.hive_catalog import HiveCatalog
from pyhivecatalog.common.options import Options
from pyhivecatalog.common.options.config import CatalogOptions
from pyhivecatalog.metastore.memory_metastore_client import \
    MemoryMetastoreClient
from pyhivecatalog.metastore.rest.rest_metastore_client import \
    RESTMetastoreClient


class CatalogFactory:

    METASTORE_REGISTRY = {
        "memory": lambda options: MemoryMetastoreClient(),
        "rest": RESTMetastoreClient,
    }

    @staticmethod
    def create(catalog_options: Dict[str, str]) -> Catalog:
        """Builds and opens a HiveCatalog from string options."""
        options = Options(dict(catalog_options))
        identifier = options.get(CatalogOptions.METASTORE)
        client_factory = CatalogFactory.METASTORE_REGISTRY.get(identifier)
        if client_factory is None:
            raise ValueError(f"Unknown metastore identifier: {identifier}. "
                             f"Available types: {list(CatalogFactory.METASTORE_REGISTRY.keys())}")
        catalog = HiveCatalog(options.get(CatalogOptions.CATALOG_NAME),
                              client_factory(options),
                              options.get(CatalogOptions.DEFAULT_DATABASE),
                              options.get(CatalogOptions.HIVE_VERSION))
        catalog.open()
        return catalog
