"""Built-in sources and formatters.

Sources resolve selectors ("{Person.Name}"); formatters render the
resolved value ("{0:plural:item|items}"). Both follow the
try-handle-or-decline contract in extensions.base; registration order
decides which extension gets the first chance.

Python 3.13+.
"""

from .base import ExtensionBase, Formatter, FormatterBase, Initializable, Source
from .choose import ChooseFormatter
from .conditional import ConditionalFormatter
from .default_formatter import DefaultFormatter, FormatDelegate
from .default_source import DefaultSource
from .dictionary_source import DictionarySource
from .ismatch import IsMatchFormatter
from .list_formatter import ListFormatter, current_collection_index
from .persistent_variables_source import PersistentVariablesSource
from .plural import PluralLocalizationFormatter
from .reflection_source import ReflectionSource
from .substring import SubStringFormatter
from .template import TemplateFormatter
from .time import TimeFormatter
from .value_tuple_source import ValueTupleSource
from .xelement import XElementFormatter
from .xml_source import XmlSource

__all__ = [
    "ChooseFormatter",
    "ConditionalFormatter",
    "DefaultFormatter",
    "DefaultSource",
    "DictionarySource",
    "ExtensionBase",
    "FormatDelegate",
    "Formatter",
    "FormatterBase",
    "Initializable",
    "IsMatchFormatter",
    "ListFormatter",
    "PersistentVariablesSource",
    "PluralLocalizationFormatter",
    "ReflectionSource",
    "Source",
    "SubStringFormatter",
    "TemplateFormatter",
    "TimeFormatter",
    "ValueTupleSource",
    "XElementFormatter",
    "XmlSource",
    "current_collection_index",
]
