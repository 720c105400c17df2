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
from dataclasses import field, fields, is_dataclass
from typing import Any, Dict, List, Type, TypeVar, Union

T = TypeVar("T")


def json_field(json_name: str, **kwargs):
    """Create a field with custom JSON name"""
    return field(metadata={"json_name": json_name}, **kwargs)


class JSON:
    """Maps dataclasses carrying ``json_field`` metadata to and from JSON."""

    @staticmethod
    def to_json(obj: Any, **kwargs) -> str:
        return json.dumps(JSON.to_dict(obj), ensure_ascii=False, **kwargs)

    @staticmethod
    def from_json(json_str: str, target_class: Type[T]) -> T:
        return JSON.from_dict(json.loads(json_str), target_class)

    @staticmethod
    def to_dict(obj: Any) -> Any:
        # Objects with a hand written mapping win over the field walk
        if hasattr(obj, "to_dict") and callable(getattr(obj, "to_dict")):
            return obj.to_dict()
        if not is_dataclass(obj):
            return obj

        result = {}
        for field_info in fields(obj):
            json_name = field_info.metadata.get("json_name", field_info.name)
            result[json_name] = JSON._value_to_json(getattr(obj, field_info.name))
        return result

    @staticmethod
    def _value_to_json(value: Any) -> Any:
        if hasattr(value, "to_dict") or is_dataclass(value):
            return JSON.to_dict(value)
        if isinstance(value, list):
            return [JSON._value_to_json(item) for item in value]
        if isinstance(value, dict):
            return {key: JSON._value_to_json(item) for key, item in value.items()}
        return value

    @staticmethod
    def from_dict(data: Any, target_class: Type[T]) -> T:
        if data is None:
            return None
        if hasattr(target_class, "from_dict") and callable(getattr(target_class, "from_dict")):
            return target_class.from_dict(data)

        field_mapping = {}
        type_mapping = {}
        for field_info in fields(target_class):
            if not field_info.init:
                continue
            json_name = field_info.metadata.get("json_name", field_info.name)
            field_mapping[json_name] = field_info.name
            type_mapping[json_name] = field_info.type

        kwargs = {}
        for json_name, value in data.items():
            if json_name in field_mapping:
                kwargs[field_mapping[json_name]] = JSON._value_from_json(value, type_mapping[json_name])
        return target_class(**kwargs)

    @staticmethod
    def _value_from_json(value: Any, field_type: Any) -> Any:
        if value is None:
            return None
        origin_type = getattr(field_type, '__origin__', None)
        args = getattr(field_type, '__args__', None) or ()
        if origin_type is Union:
            # Optional[X] is Union[X, None]
            non_none = [arg for arg in args if arg is not type(None)]
            if len(non_none) == 1:
                return JSON._value_from_json(value, non_none[0])
            return value
        if origin_type in (list, List) and args:
            return [JSON._value_from_json(item, args[0]) for item in value]
        if origin_type in (dict, Dict) and len(args) == 2:
            return {key: JSON._value_from_json(item, args[1]) for key, item in value.items()}
        if isinstance(field_type, type) and (is_dataclass(field_type) or hasattr(field_type, "from_dict")):
            return JSON.from_dict(value, field_type)
        return value
