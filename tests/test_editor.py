import pytest

from funnel_blueprint.editor import SECTION_SEPARATOR, ContentEditor
from funnel_blueprint.models.content import EmailContent, LeadMagnetPoint


def test_add_keyword_touches_only_social_capture(content):
    editor = ContentEditor(content)
    updated = editor.add_array_item("socialCapture", "keywords", "BONUS")

    assert updated.social_capture.keywords[-1] == "BONUS"
    assert len(updated.social_capture.keywords) == len(content.social_capture.keywords) + 1
    assert "BONUS" not in content.social_capture.keywords
    assert updated.landing_page is content.landing_page
    assert updated.lead_magnet is content.lead_magnet
    assert updated.emails is content.emails
    assert updated.lead_magnet_workflow is content.lead_magnet_workflow
    assert editor.content is updated


def test_update_scalar_field_accepts_names_and_aliases(content):
    editor = ContentEditor(content)
    editor.update_scalar_field("landingPage", "heroHeadline", "A New Headline")
    updated = editor.update_scalar_field("lead_magnet", "title", "Renamed")

    assert updated.landing_page.hero_headline == "A New Headline"
    assert updated.lead_magnet.title == "Renamed"
    assert content.landing_page.hero_headline != "A New Headline"


def test_update_array_item_and_item_field(content):
    editor = ContentEditor(content)
    editor.update_array_item("landingPage", "painPoints", 0, "Always tired")
    editor.update_item_field("emails", None, 1, "subjectLine", "A better subject")
    updated = editor.update_item_field("leadMagnet", "points", 0, "content", "Turn screens off at 9pm.")

    assert updated.landing_page.pain_points[0] == "Always tired"
    assert updated.emails[1].subject_line == "A better subject"
    assert updated.emails[0] == content.emails[0]
    assert updated.lead_magnet.points[0].content == "Turn screens off at 9pm."
    assert updated.lead_magnet.points[0].title == content.lead_magnet.points[0].title


def test_update_array_item_coerces_objects(content):
    editor = ContentEditor(content)
    updated = editor.update_array_item(
        "socialCapture", "postCTAs", 0, {"hook": "New Hook", "content": "Comment NOW"}
    )
    assert updated.social_capture.post_ctas[0].hook == "New Hook"


def test_add_array_item_defaults():
    editor = ContentEditor()
    editor.add_array_item("emails", None)
    editor.add_array_item("leadMagnet", "points")
    updated = editor.add_array_item("landingPage", "benefits")

    assert updated.emails == [EmailContent()]
    assert updated.lead_magnet.points == [LeadMagnetPoint()]
    assert updated.landing_page.benefits == [""]


def test_remove_array_item(content):
    editor = ContentEditor(content)
    updated = editor.remove_array_item("emails", None, 0)
    assert [email.day for email in updated.emails] == ["Day 2", "Day 4", "Day 7"]
    assert len(content.emails) == 4


def test_out_of_range_index_raises(content):
    editor = ContentEditor(content)
    with pytest.raises(IndexError):
        editor.remove_array_item("landingPage", "benefits", 99)
    with pytest.raises(IndexError):
        editor.update_array_item("emails", None, -1, {})
    assert editor.content is content


def test_unknown_names_raise_key_error(content):
    editor = ContentEditor(content)
    with pytest.raises(KeyError):
        editor.update_scalar_field("nowhere", "title", "x")
    with pytest.raises(KeyError):
        editor.update_scalar_field("landingPage", "notAField", "x")
    with pytest.raises(KeyError):
        editor.update_scalar_field("landingPage", "painPoints", "x")
    with pytest.raises(KeyError):
        editor.update_scalar_field("emails", "title", "x")
    with pytest.raises(KeyError):
        editor.add_array_item("landingPage", "heroHeadline")
    with pytest.raises(KeyError):
        editor.add_array_item("socialCapture", None)
    with pytest.raises(KeyError):
        editor.serialize_section("nowhere")


def test_serialize_section(content):
    editor = ContentEditor(content)
    emails = editor.serialize_section("emails")
    assert emails.startswith("EMAIL SEQUENCE")
    assert "EMAIL 1: Welcome + Delivery (Immediately)" in emails
    assert "EMAIL 4: Invitation (Day 7)" in emails

    landing = editor.serialize_section("landingPage")
    assert f"Headline: {content.landing_page.hero_headline}" in landing
    assert "✓ " in landing


def test_serialize_all_joins_every_section(content):
    text = ContentEditor(content).serialize_all()
    titles = [
        "LANDING PAGE COPY",
        "LEAD MAGNET CONTENT",
        "EMAIL SEQUENCE",
        "SOCIAL CAPTURE",
        "LEAD MAGNET WORKFLOW",
    ]
    positions = [text.index(title) for title in titles]
    assert positions == sorted(positions)
    assert text.count(SECTION_SEPARATOR) == len(titles) - 1
