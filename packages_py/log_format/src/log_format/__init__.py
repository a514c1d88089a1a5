"""
Log formatters for console output and Elasticsearch log pipelines.
"""
from .fields import RESERVED_ATTRS, extra_fields
from .skimpy import SkimpyFormatter, create_skimpy_logger
from .elastic import ElasticFormatter, create_elastic_logger


__all__ = [
    "RESERVED_ATTRS",
    "extra_fields",
    "SkimpyFormatter",
    "create_skimpy_logger",
    "ElasticFormatter",
    "create_elastic_logger",
]

__version__ = "1.0.0"
