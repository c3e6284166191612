"""Tests for turning experience and education descriptions into bullet units."""

from resume_parser.core.bullet_splitter import (
    BulletItem,
    process_description,
    split_into_bullets,
    split_long_description,
)


def test_marked_bullets():
    items = process_description("• Led team\n• Shipped v2")
    assert items == [BulletItem("Led team", True), BulletItem("Shipped v2", True)]


def test_mixed_plain_and_bullet_lines():
    items = process_description("Intro\n- Built API")
    assert items == [BulletItem("Intro", False), BulletItem("Built API", True)]


def test_short_paragraph_is_one_item():
    assert process_description("Short paragraph.") == [BulletItem("Short paragraph.", False)]


def test_empty_description():
    assert process_description("") == []
    assert process_description("   \n ") == []


def test_colon_clauses():
    text = (
        "Leadership: Directed a cross-functional team of twelve engineers across three time zones. "
        "Delivery: Shipped the new payments platform two months ahead of the original schedule. "
        "Quality: Raised automated test coverage from forty to ninety percent across all services."
    )
    pieces = split_into_bullets(text)
    assert len(pieces) == 3
    assert pieces[0] == "Leadership: Directed a cross-functional team of twelve engineers across three time zones."
    assert pieces[2].startswith("Quality: ")


def test_repeated_action_verb():
    """A verb that opens several sentences becomes the label of each piece."""
    text = (
        "Managed the migration of legacy billing services to the cloud platform. "
        "Managed a team of six contractors through the full delivery cycle. "
        "Managed vendor relationships and quarterly budget reviews for the department."
    )
    items = process_description(text)
    assert len(items) == 3
    assert all(item.is_bullet for item in items)
    assert items[0].text == "Managed: the migration of legacy billing services to the cloud platform."


def test_sentence_separators():
    text = (
        "Owned the quarterly roadmap for the analytics product line. "
        "Partnered with finance on pricing experiments across regions. "
        "Ran weekly customer interviews with enterprise accounts. "
        "Wrote the onboarding guide used by every new hire in sales."
    )
    pieces = split_into_bullets(text)
    assert len(pieces) == 4
    assert pieces[0] == "Owned the quarterly roadmap for the analytics product line"
    assert pieces[-1] == "Wrote the onboarding guide used by every new hire in sales."


def test_lowercase_sentences():
    text = (
        "reviewed pull requests for the platform team every single working day. "
        "mentored two junior engineers through their first production releases. "
        "wrote runbooks for the on-call rotation and incident response process."
    )
    pieces = split_into_bullets(text)
    assert len(pieces) == 3
    assert pieces[1] == "mentored two junior engineers through their first production releases."


def test_unsplittable_long_text_stays_whole():
    text = " ".join(["word"] * 50)
    assert split_long_description(text) == [text]
    assert process_description(text) == [BulletItem(text, False)]
