"""
Dataset search models.

Every field of DatasetQuery is optional and contributes one search
condition; conditions are chained with the operator given in the query
string.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from infrastructure.models import DATE_PATTERN

ChainOperator = Literal["AND", "OR"]


class DatasetOperatorQuery(BaseModel):
    op: ChainOperator = Field(default="AND", description="Chaining operator for query filters")


class DateRange(BaseModel):
    std_date_start: Optional[str] = Field(default=None, pattern=DATE_PATTERN, description="Start date, inclusive")
    std_date_end: Optional[str] = Field(default=None, pattern=DATE_PATTERN, description="End date, inclusive")

    @model_validator(mode="after")
    def require_bound(self) -> "DateRange":
        if self.std_date_start is None and self.std_date_end is None:
            raise ValueError("Provide std_date_start, std_date_end or both")
        return self


class SubmissionRange(BaseModel):
    min: Optional[str] = Field(default=None, description="Earliest submission date")
    max: Optional[str] = Field(default=None, description="Latest submission date")

    @model_validator(mode="after")
    def require_bound(self) -> "SubmissionRange":
        if self.min is None and self.max is None:
            raise ValueError("Provide min, max or both")
        return self


class CountRange(BaseModel):
    min: Optional[int] = Field(default=None, description="Minimum record count")
    max: Optional[int] = Field(default=None, description="Maximum record count")

    @model_validator(mode="after")
    def require_bound(self) -> "CountRange":
        if self.min is None and self.max is None:
            raise ValueError("Provide min, max or both")
        return self


class ItemSelection(BaseModel):
    """Array property selection: any of the items, or all with doAll."""
    model_config = ConfigDict(populate_by_name=True)

    items: List[str] = Field(description="Items to match")
    do_all: bool = Field(default=False, alias="doAll", description="Require all items")


class DatasetQuery(BaseModel):
    """Dataset search parameters."""
    key: Optional[List[str]] = Field(default=None, alias="_key", description="Dataset identifiers")
    collection: Optional[List[str]] = Field(default=None, alias="_collection", description="Database collection names")
    std_project: Optional[List[str]] = Field(default=None, description="Project codes")
    std_dataset: Optional[str] = Field(default=None, description="Dataset code or acronym wildcard")
    std_dataset_group: Optional[List[str]] = Field(default=None, description="Dataset group codes")
    std_date: Optional[DateRange] = Field(default=None, description="Data date range")
    std_date_submission: Optional[SubmissionRange] = Field(default=None, description="Submission date range")
    title: Optional[str] = Field(default=None, alias="_title", description="Title keywords")
    description: Optional[str] = Field(default=None, alias="_description", description="Description keywords")
    citation: Optional[str] = Field(default=None, alias="_citation", description="Citation keywords")
    count: Optional[CountRange] = Field(default=None, description="Data record count range")
    subject: Optional[List[str]] = Field(default=None, alias="_subject", description="Dataset subjects")
    classes: Optional[ItemSelection] = Field(default=None, alias="_classes", description="Descriptor classes")
    domain: Optional[ItemSelection] = Field(default=None, alias="_domain", description="Descriptor domains")
    tag: Optional[ItemSelection] = Field(default=None, alias="_tag", description="Descriptor tags")
    species_list: Optional[str] = Field(default=None, description="Species keywords")
    std_terms: Optional[ItemSelection] = Field(default=None, description="Data variables")
    std_terms_quant: Optional[ItemSelection] = Field(default=None, description="Quantitative data variables")
    std_terms_key: Optional[ItemSelection] = Field(default=None, description="Key fields")
    std_terms_summary: Optional[ItemSelection] = Field(default=None, description="Summary fields")
