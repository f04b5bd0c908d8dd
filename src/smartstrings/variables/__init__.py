"""Reactive variables for templates that refresh when their inputs change.

Python 3.13+. Zero external dependencies.
"""

from .base import ObservableVariable, SourceVariable, VariableGroup
from .batch import UpdateBatch, default_batch, update_scope
from .group import VariablesGroup, normalize_variable_name
from .subscription import RefreshSubscription
from .variable import (
    BoolVariable,
    FloatVariable,
    IntVariable,
    NestedVariablesGroup,
    ObjectVariable,
    StringVariable,
    Variable,
)

__all__ = [
    "BoolVariable",
    "FloatVariable",
    "IntVariable",
    "NestedVariablesGroup",
    "ObjectVariable",
    "ObservableVariable",
    "RefreshSubscription",
    "SourceVariable",
    "StringVariable",
    "UpdateBatch",
    "Variable",
    "VariableGroup",
    "VariablesGroup",
    "default_batch",
    "normalize_variable_name",
    "update_scope",
]
