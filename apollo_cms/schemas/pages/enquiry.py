from __future__ import annotations

from typing import Literal

from pydantic import Field

from apollo_cms.schemas.pages.common import ContentModel, Text

InputType = Literal["text", "email", "tel", "textarea", "select", "checkbox", "radio"]


class EnquiryFormField(ContentModel):
    label: Text = ""
    name: Text = ""
    input_type: InputType = "text"
    placeholder: Text = ""
    options: list[Text] = Field(default_factory=list)
    required: bool = False


class EnquiryForm(ContentModel):
    form_title: Text = "Enquiry Form"
    submit_button_text: Text = "Submit Enquiry"
    fields: list[EnquiryFormField] = Field(default_factory=list)


class EnquiryPageContent(ContentModel):
    enquiry_form: EnquiryForm = Field(default_factory=EnquiryForm)
