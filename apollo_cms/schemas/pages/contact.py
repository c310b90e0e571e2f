from __future__ import annotations

from pydantic import Field

from apollo_cms.schemas.pages.common import ContentModel, Email, Text, Url


class ContactFormLabels(ContentModel):
    name: Text = ""
    email: Text = ""
    phone: Text = ""
    message: Text = ""
    submit_button_text: Text = ""


class ContactInfo(ContentModel):
    phone: Text = ""
    email: Email = ""
    address: Text = ""
    map_embed: Url = ""


class ContactPageContent(ContentModel):
    contact_form: ContactFormLabels = Field(default_factory=ContactFormLabels)
    contact_info: ContactInfo = Field(default_factory=ContactInfo)
