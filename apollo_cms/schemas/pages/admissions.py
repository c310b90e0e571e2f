from __future__ import annotations

from pydantic import Field

from apollo_cms.schemas.pages.common import ContentModel, FaqItem, Text, Url


class ApplicationStep(ContentModel):
    number: Text = ""
    title: Text = ""
    description: Text = ""


class ApplicationSteps(ContentModel):
    main_heading: Text = ""
    steps: list[ApplicationStep] = Field(default_factory=list)


class AdmissionsFaq(ContentModel):
    section_heading: Text = ""
    faqs: list[FaqItem] = Field(default_factory=list)


class EligibilitySection(ContentModel):
    eligibility_criteria: Text = ""
    duration_info: Text = ""
    fee_structure: Text = ""
    button_text: Text = ""
    button_link: Url = ""


class AdmissionsPageContent(ContentModel):
    application_steps: ApplicationSteps = Field(default_factory=ApplicationSteps)
    admissions_faq: AdmissionsFaq = Field(default_factory=AdmissionsFaq)
    eligibility_section: EligibilitySection = Field(default_factory=EligibilitySection)
