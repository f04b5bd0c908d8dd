"""Factory for a SmartFormatter with the built-in extensions registered.

Python 3.13+.
"""

from __future__ import annotations

import logging

from smartstrings.extensions.choose import ChooseFormatter
from smartstrings.extensions.conditional import ConditionalFormatter
from smartstrings.extensions.default_formatter import DefaultFormatter
from smartstrings.extensions.default_source import DefaultSource
from smartstrings.extensions.dictionary_source import DictionarySource
from smartstrings.extensions.ismatch import IsMatchFormatter
from smartstrings.extensions.list_formatter import ListFormatter
from smartstrings.extensions.plural import PluralLocalizationFormatter
from smartstrings.extensions.reflection_source import ReflectionSource
from smartstrings.extensions.substring import SubStringFormatter
from smartstrings.extensions.time import TimeFormatter
from smartstrings.extensions.value_tuple_source import ValueTupleSource
from smartstrings.extensions.xelement import XElementFormatter
from smartstrings.extensions.xml_source import XmlSource
from smartstrings.runtime.cache_config import CacheConfig
from smartstrings.runtime.formatter import SmartFormatter
from smartstrings.settings import SmartSettings

__all__ = ["create_default_smart_format"]

logger = logging.getLogger(__name__)


def create_default_smart_format(
    settings: SmartSettings | None = None, *, cache: CacheConfig | None = None
) -> SmartFormatter:
    """Create a new SmartFormatter with the built-in sources and formatters.

    Each call returns a fresh, isolated engine; there is no process-wide
    default instance.

    Sources, in order:
        ListFormatter, DictionarySource, ValueTupleSource, XmlSource,
        ReflectionSource, DefaultSource

    Formatters, in order:
        ListFormatter, PluralLocalizationFormatter, ConditionalFormatter,
        TimeFormatter, XElementFormatter, ChooseFormatter,
        SubStringFormatter, IsMatchFormatter, DefaultFormatter

    The list formatter is one instance serving both roles, so "{Items.index}"
    sees the iteration it belongs to.

    Args:
        settings: Engine settings (default: SmartSettings())
        cache: Format cache configuration (default: CacheConfig())

    Returns:
        Ready-to-use engine

    Example:
        >>> smart = create_default_smart_format()
        >>> smart.format("{0} {0:p:item|items}", 3)
        '3 items'

    Use Case:
        Hosts with extra sources append them after creation:

        >>> smart = create_default_smart_format()
        >>> smart.add_source(PersistentVariablesSource())
    """
    smart = SmartFormatter(settings, cache=cache)
    list_formatter = ListFormatter()

    smart.add_source(
        list_formatter,
        DictionarySource(),
        ValueTupleSource(),
        XmlSource(),
        ReflectionSource(),
        DefaultSource(),
    )
    smart.add_formatter(
        list_formatter,
        PluralLocalizationFormatter(),
        ConditionalFormatter(),
        TimeFormatter(),
        XElementFormatter(),
        ChooseFormatter(),
        SubStringFormatter(),
        IsMatchFormatter(),
        DefaultFormatter(),
    )

    logger.info(
        "Created SmartFormatter with %d sources and %d formatters",
        len(smart.sources),
        len(smart.formatters),
    )
    return smart
