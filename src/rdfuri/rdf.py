"""Bridges between :class:`~rdfuri.uri.URI` and rdflib terms.

rdflib identifies resources with :class:`rdflib.URIRef`, whose value is
the serialized URI string. These helpers validate such terms, resolve
references into terms and compute relative references for every IRI in
a graph, e.g. to write compact Turtle against a ``@base``.
"""

from __future__ import annotations

import logging
from typing import Dict, Union

from rdflib import Graph, URIRef

from rdfuri.errors import MalformedURIError
from rdfuri.uri import URI

logger = logging.getLogger(__name__)


def to_uriref(uri: URI) -> URIRef:
    """Convert a URI value into an rdflib term."""
    return URIRef(str(uri))


def from_term(term: Union[URIRef, str]) -> URI:
    """Parse an rdflib term (or plain IRI string) into a URI value.

    Raises:
        MalformedURIError: If the term is not an absolute RFC 2396 URI
    """
    return URI(str(term))


def resolve_term(base: Union[URI, URIRef, str], reference: str) -> URIRef:
    """Resolve *reference* against *base* and return an rdflib term."""
    if not isinstance(base, URI):
        base = from_term(base)
    return to_uriref(base.resolve(reference))


def relativize_term(base: Union[URI, URIRef, str], term: URIRef, flags: int) -> str:
    """Return the shortest reference from *base* to *term* allowed by *flags*."""
    if not isinstance(base, URI):
        base = from_term(base)
    return base.relativize(str(term), flags)


def relativize_graph(graph: Graph, base: Union[URI, URIRef, str], flags: int) -> Dict[URIRef, str]:
    """Map every IRI term used in *graph* to its reference from *base*.

    Terms that are not valid RFC 2396 URIs (e.g. IRIs with non-ASCII
    characters) are logged and left out of the mapping.

    Args:
        graph: The graph whose subjects, predicates and objects are scanned
        base: Base URI for the references
        flags: Combination of :class:`~rdfuri.relativizer.FormMask` bits

    Returns:
        dict
            ``{term: reference}`` for every term that could be parsed
    """
    if not isinstance(base, URI):
        base = from_term(base)

    references: Dict[URIRef, str] = {}
    skipped = set()
    for triple in graph:
        for term in triple:
            if not isinstance(term, URIRef):
                continue
            if term in references or term in skipped:
                continue
            try:
                references[term] = base.relativize(str(term), flags)
            except MalformedURIError as exc:
                logger.warning("Skipping term %s: %s", term, exc)
                skipped.add(term)
    return references
