from __future__ import annotations

from pydantic import Field

from apollo_cms.schemas.pages.common import ContentModel, Text, Url


class Banner(ContentModel):
    heading: Text = ""
    subheading: Text = ""
    background_image: Url = ""


class VisionMission(ContentModel):
    vision_text: Text = ""
    mission_points: list[Text] = Field(default_factory=list)


class TimelineEvent(ContentModel):
    year: Text = ""
    event: Text = ""


class TimelineSection(ContentModel):
    events: list[TimelineEvent] = Field(default_factory=list)


class AboutUsPageContent(ContentModel):
    banner: Banner = Field(default_factory=Banner)
    vision_mission: VisionMission = Field(default_factory=VisionMission)
    timeline_section: TimelineSection = Field(default_factory=TimelineSection)
