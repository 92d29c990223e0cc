"""rdfuri: RFC 2396 URI references for RDF tooling.

Main modules:
- uri: the immutable URI value type
- parser: splitting and validating URI references
- resolver: resolving references against a base URI
- relativizer: computing the shortest reference from a base to a URI
- rdf: conversions to and from rdflib terms
"""

from .errors import ErrorKind, MalformedURIError, RdfUriError
from .relativizer import FormMask
from .uri import URI

# Import version information
from .version import VERSION

__all__ = [
    "VERSION",
    "ErrorKind",
    "FormMask",
    "MalformedURIError",
    "RdfUriError",
    "URI",
]
