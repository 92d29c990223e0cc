"""
Pydantic models for the structured view of URIs.

Used by the command line interface to print parsed, resolved and
relativized URIs as JSON.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from rdfuri.uri import URI


class URIComponents(BaseModel):
    """The components of a parsed URI."""

    uri: str = Field(..., description="Serialized URI")
    scheme: Optional[str] = Field(None, description="Scheme name")
    userinfo: Optional[str] = Field(None, description="Userinfo before '@'")
    host: Optional[str] = Field(None, description="Host, empty for '//' alone")
    port: int = Field(-1, ge=-1, le=65535, description="Port, -1 if not given")
    path: Optional[str] = Field(None, description="Path or opaque part")
    query: Optional[str] = Field(None, description="Query after '?'")
    fragment: Optional[str] = Field(None, description="Fragment after '#'")
    hierarchical: bool = Field(..., description="Whether '//' authority was used")
    normal_form_c: bool = Field(..., description="Whether the URI is in NFC")

    model_config = ConfigDict(extra="forbid")

    @classmethod
    def from_uri(cls, uri: URI) -> "URIComponents":
        """Build the model from a URI value."""
        return cls(
            uri=str(uri),
            scheme=uri.scheme,
            userinfo=uri.userinfo,
            host=uri.host,
            port=uri.port,
            path=uri.path,
            query=uri.query,
            fragment=uri.fragment,
            hierarchical=uri.is_hierarchical,
            normal_form_c=uri.is_normal_form_c(),
        )

    def to_uri(self) -> URI:
        """Rebuild the URI value from the components."""
        return URI.from_parts(
            self.scheme,
            host=self.host,
            path=self.path,
            query=self.query,
            fragment=self.fragment,
            userinfo=self.userinfo,
            port=self.port,
        )


class ResolutionResult(BaseModel):
    """A reference resolved against a base."""

    base: str
    reference: str
    resolved: URIComponents


class RelativizeResult(BaseModel):
    """The reference computed from a base to a target."""

    base: str
    target: str
    flags: list[str] = Field(default_factory=list, description="Allowed forms")
    reference: str
