from __future__ import annotations

from pydantic import Field

from apollo_cms.schemas.pages.common import ContentModel, Text, Url

HERO_BUTTONS_MIN = 1
HERO_BUTTONS_MAX = 3


class HeroButton(ContentModel):
    text: Text = ""
    link: Url = ""


class HeroSlide(ContentModel):
    img_src: Url = ""
    alt: Text = ""
    heading: Text = ""
    paragraph: Text = ""
    buttons: list[HeroButton] = Field(
        default_factory=lambda: [HeroButton()],
        min_length=HERO_BUTTONS_MIN,
        max_length=HERO_BUTTONS_MAX,
    )


class HeroSection(ContentModel):
    slides: list[HeroSlide] = Field(default_factory=list)


class WhyChooseFeature(ContentModel):
    icon_src: Text = ""
    title: Text = ""
    description: Text = ""


class WhyChoose(ContentModel):
    intro_heading: Text = ""
    intro_paragraph: Text = ""
    features: list[WhyChooseFeature] = Field(default_factory=list)


class ProgramItem(ContentModel):
    img_src: Url = ""
    alt: Text = ""
    title: Text = ""
    description: Text = ""
    btn_link: Url = ""


class ProgramsList(ContentModel):
    section_heading: Text = ""
    section_intro: Text = ""
    programs: list[ProgramItem] = Field(default_factory=list)


class CounterItem(ContentModel):
    value: int | float | str = ""
    label: Text = ""


class Counters(ContentModel):
    counters: list[CounterItem] = Field(default_factory=list)


class CentreItem(ContentModel):
    img_src: Url = ""
    alt: Text = ""
    name: Text = ""
    description: Text = ""
    btn_link: Url = ""


class Centres(ContentModel):
    section_heading: Text = ""
    centres: list[CentreItem] = Field(default_factory=list)


class LogoItem(ContentModel):
    img_src: Url = ""
    alt: Text = ""
    name: Text = ""


class Accreditations(ContentModel):
    logos: list[LogoItem] = Field(default_factory=list)


class GlobalPartnerships(ContentModel):
    section_heading: Text = ""
    partners: list[LogoItem] = Field(default_factory=list)


class CtaSection(ContentModel):
    heading: Text = ""
    button_text: Text = ""
    button_link: Url = ""


class HomePageContent(ContentModel):
    hero_section: HeroSection = Field(default_factory=HeroSection)
    why_choose: WhyChoose = Field(default_factory=WhyChoose)
    programs_list: ProgramsList = Field(default_factory=ProgramsList)
    counters: Counters = Field(default_factory=Counters)
    centres: Centres = Field(default_factory=Centres)
    accreditations: Accreditations = Field(default_factory=Accreditations)
    global_partnerships: GlobalPartnerships = Field(default_factory=GlobalPartnerships)
    cta_section: CtaSection = Field(default_factory=CtaSection)
