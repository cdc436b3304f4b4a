from __future__ import annotations
from typing import AsyncIterator, Optional
from sqlalchemy import select
from gainfunction.models import Template
from gainfunction.repositories.base import BaseRepository
from gainfunction.schemas.template import TemplateRead

class TemplateRepository(BaseRepository[TemplateRead]):
    model = Template
    read_schema = TemplateRead

    def get(self, template_id: int) -> Optional[TemplateRead]:
        row = self.db.get(Template, template_id)
        return self.to_read(row) if row else None

    def list_all(self) -> list[TemplateRead]:
        return self.fetch(select(Template).order_by(Template.name.asc(), Template.id.asc()))

    def observe_all(self) -> AsyncIterator[list[TemplateRead]]:
        return self.observe(self.list_all)

    def search_by_name(self, query: str) -> list[TemplateRead]:
        """Case-insensitive substring match on the name."""
        escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        stmt = select(Template).where(Template.name.ilike(f"%{escaped}%", escape="\\"))\
                               .order_by(Template.name.asc(), Template.id.asc())
        return self.fetch(stmt)
