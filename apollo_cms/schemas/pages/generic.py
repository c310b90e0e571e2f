from __future__ import annotations

from apollo_cms.schemas.pages.common import ContentModel, Text


class GenericPageContent(ContentModel):
    heading: Text = ""
    subheading: Text = ""
    body: Text = ""
