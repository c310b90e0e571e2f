from __future__ import annotations

from pydantic import Field

from apollo_cms.schemas.pages.common import ContentModel, Link, Text, Url


class CentreCard(ContentModel):
    name: Text = ""
    img_src: Url = ""
    alt: Text = ""
    description: Text = ""
    btn_link: Link = ""


class CentreCards(ContentModel):
    centres: list[CentreCard] = Field(default_factory=list)


class CentresOverviewPageContent(ContentModel):
    centre_cards: CentreCards = Field(default_factory=CentreCards)


class CentreFeature(ContentModel):
    icon: Text = ""
    text: Text = ""


class CentreInfo(ContentModel):
    heading: Text = ""
    paragraph: Text = ""
    features: list[CentreFeature] = Field(default_factory=list)


class CentreDetailPageContent(ContentModel):
    centre_info: CentreInfo = Field(default_factory=CentreInfo)
