from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class PageRequest(BaseModel):
    pageno: int = Field(default=1, ge=1, description="Upstream page number")


class CategoryRequest(PageRequest):
    # Checked by the handler so a missing category yields 400, not 422.
    category: Optional[str] = None
