from __future__ import annotations

from pydantic import Field

from apollo_cms.schemas.pages.common import ContentModel, Link, Text, Url


class ProgramTab(ContentModel):
    title: Text = ""
    anchor_link: Text = ""


class ProgramTabs(ContentModel):
    tabs: list[ProgramTab] = Field(default_factory=list)


class ProgramCard(ContentModel):
    title: Text = ""
    img_src: Url = ""
    alt: Text = ""
    description: Text = ""
    duration: Text = ""
    btn_link: Link = ""


class ProgramCards(ContentModel):
    programs: list[ProgramCard] = Field(default_factory=list)


class ProgramsListingPageContent(ContentModel):
    program_tabs: ProgramTabs = Field(default_factory=ProgramTabs)
    program_cards: ProgramCards = Field(default_factory=ProgramCards)
