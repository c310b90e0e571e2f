from __future__ import annotations

from pydantic import Field

from apollo_cms.schemas.pages.common import ContentModel, FaqItem, Text, Url


class ProgramHero(ContentModel):
    heading: Text = ""
    subheading: Text = ""
    hero_image: Url = ""
    btn_text: Text = ""
    btn_link: Url = ""


class OverviewSection(ContentModel):
    intro_text: Text = ""
    highlights: list[Text] = Field(default_factory=list)


class YearWiseSubjects(ContentModel):
    year1: list[Text] = Field(default_factory=list)
    year2: list[Text] = Field(default_factory=list)
    year3: list[Text] = Field(default_factory=list)


class CurriculumSection(ContentModel):
    year_wise_subjects: YearWiseSubjects = Field(default_factory=YearWiseSubjects)


class EligibilityDuration(ContentModel):
    eligibility: Text = ""
    duration: Text = ""


class CareerOpportunities(ContentModel):
    careers: list[Text] = Field(default_factory=list)


class ProgramFaqs(ContentModel):
    faqs: list[FaqItem] = Field(default_factory=list)


class ProgramDetailPageContent(ContentModel):
    program_hero: ProgramHero = Field(default_factory=ProgramHero)
    overview_section: OverviewSection = Field(default_factory=OverviewSection)
    curriculum_section: CurriculumSection = Field(default_factory=CurriculumSection)
    eligibility_duration: EligibilityDuration = Field(default_factory=EligibilityDuration)
    career_opportunities: CareerOpportunities = Field(default_factory=CareerOpportunities)
    program_faqs: ProgramFaqs = Field(default_factory=ProgramFaqs)
