"""Output of the STAR rewriter: restructured answer text plus change notes."""

from pydantic import BaseModel


class RewriteStructure(BaseModel):
    has_s: bool = False
    has_t: bool = False
    has_a: bool = False
    has_r: bool = False
    has_metrics: bool = False


class RewriteLength(BaseModel):
    before: int = 0
    after: int = 0


class RewriteNotes(BaseModel):
    changes: list[str] = []
    inserted_placeholders: list[str] = []  # lines carrying [X]/[Y]/[Z] for the user to fill in
    structure: RewriteStructure = RewriteStructure()
    length: RewriteLength = RewriteLength()


class StarRewrite(BaseModel):
    improved_text: str = ""
    notes: RewriteNotes = RewriteNotes()
