"""
Value model of the language: tagged variants, tags, dates, scales and paths.
"""

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from squiggle_core.value.path import PathItem, PathItemType, PathRoot, ValuePath, lookup_item
from squiggle_core.value.scale import Scale, ScaleType
from squiggle_core.value.sdate import SDate, SDuration
from squiggle_core.value.tags import EMPTY_TAGS, TAG_KEYS, ValueTags
from squiggle_core.value.values import (
    BaseValue,
    Value,
    VArray,
    VBool,
    VDate,
    VDict,
    VDist,
    VDuration,
    VLambda,
    VNumber,
    VScale,
    VString,
    VVoid,
    format_number,
    uniq,
    uniq_by,
    v_array,
    v_bool,
    v_date,
    v_dict,
    v_dist,
    v_duration,
    v_lambda,
    v_number,
    v_scale,
    v_string,
    v_void,
)

__all__ = [
    "PathItem",
    "PathItemType",
    "PathRoot",
    "ValuePath",
    "lookup_item",
    "Scale",
    "ScaleType",
    "SDate",
    "SDuration",
    "EMPTY_TAGS",
    "TAG_KEYS",
    "ValueTags",
    "BaseValue",
    "Value",
    "VArray",
    "VBool",
    "VDate",
    "VDict",
    "VDist",
    "VDuration",
    "VLambda",
    "VNumber",
    "VScale",
    "VString",
    "VVoid",
    "format_number",
    "uniq",
    "uniq_by",
    "v_array",
    "v_bool",
    "v_date",
    "v_dict",
    "v_dist",
    "v_duration",
    "v_lambda",
    "v_number",
    "v_scale",
    "v_string",
    "v_void",
]
