"""Tests for read views."""

import pytest

from lions_bible.core.errors import SubjectNotFound
from lions_bible.models import SubjectKind, Verse
from lions_bible.services.actor import Actor
from lions_bible.services.listings import ListingService
from tests.conftest import TWELVE_WORDS


@pytest.fixture()
def listings(db_session) -> ListingService:
    return ListingService(db_session)


class TestVersePage:
    def test_neighbours_in_same_chapter(self, listings, verses) -> None:
        page = listings.verse_page("Genesis", 1, 2)
        assert page.verse.id == verses["gen_1_2"].id
        assert page.previous.id == verses["gen_1_1"].id
        assert page.next.id == verses["gen_1_3"].id

    def test_next_crosses_into_next_chapter(self, listings, verses) -> None:
        assert listings.verse_page("Genesis", 1, 3).next.id == verses["gen_2_1"].id

    def test_previous_is_last_verse_of_previous_chapter(self, listings, verses) -> None:
        page = listings.verse_page("Genesis", 2, 1)
        assert page.previous.id == verses["gen_1_3"].id
        assert page.next is None

    def test_first_verse_has_no_previous(self, listings, verses) -> None:
        assert listings.verse_page("Genesis", 1, 1).previous is None

    def test_missing_verse(self, listings, verses) -> None:
        with pytest.raises(SubjectNotFound):
            listings.verse_page("Genesis", 50, 1)

    def test_lowercase_slug_resolves(self, listings, verses) -> None:
        assert listings.verse_page("genesis", 1, 2).verse.id == verses["gen_1_2"].id

    @pytest.mark.parametrize("slug", ["song-of-songs", "song-of-solomon", "Song of Songs"])
    def test_multi_word_book_slugs(self, listings, db_session, slug) -> None:
        db_session.add(Verse(book="Song of Songs", chapter=1, verse=1))
        db_session.commit()
        page = listings.verse_page(slug, 1, 1)
        assert page.verse.book == "Song of Songs"
        assert page.verse.slug == "song-of-songs"

    def test_numbered_book_slug(self, listings, db_session) -> None:
        db_session.add_all([Verse(book="1 John", chapter=1, verse=1), Verse(book="1 John", chapter=1, verse=2)])
        db_session.commit()
        page = listings.verse_page("1-john", 1, 2)
        assert page.previous.book == "1 John"

    def test_unknown_slug(self, listings, verses) -> None:
        with pytest.raises(SubjectNotFound):
            listings.verse_page("revelation", 1, 1)


class TestInterpretations:
    def test_lists_visible_with_author_and_counts(self, listings, profiles, service, reader, interpretation) -> None:
        service.cast_vote(reader, SubjectKind.INTERPRETATION, interpretation.id)
        (view,) = listings.interpretations_for_verse(interpretation.verse_id)
        assert view.author.username == "lion"
        assert view.counts.upvote_count == 1

    def test_hidden_are_excluded(self, listings, service, author, interpretation) -> None:
        service.delete_interpretation(author, interpretation.id)
        assert listings.interpretations_for_verse(interpretation.verse_id) == []

    def test_sort_by_top(self, listings, service, verse, author, reader) -> None:
        first = service.submit_interpretation(author, verse.id, TWELVE_WORDS).interpretation
        second = service.submit_interpretation(reader, verse.id, TWELVE_WORDS).interpretation
        service.cast_vote(Actor(user_id="fan"), SubjectKind.INTERPRETATION, first.id)

        recent = [view.interpretation.id for view in listings.interpretations_for_verse(verse.id)]
        top = [view.interpretation.id for view in listings.interpretations_for_verse(verse.id, sort="top")]
        assert recent == [second.id, first.id]
        assert top == [first.id, second.id]

    def test_unknown_verse(self, listings) -> None:
        with pytest.raises(SubjectNotFound):
            listings.interpretations_for_verse(999)


class TestReplies:
    def test_oldest_first_without_hidden(self, listings, service, author, reader, interpretation, reply) -> None:
        later = service.submit_reply(author, interpretation.id, "Glad it helped").reply
        assert [view.reply.id for view in listings.replies_for(interpretation.id)] == [reply.id, later.id]

        service.delete_reply(reader, reply.id)
        assert [view.reply.id for view in listings.replies_for(interpretation.id)] == [later.id]

    def test_replies_of_hidden_interpretation(self, listings, service, author, interpretation) -> None:
        service.delete_interpretation(author, interpretation.id)
        with pytest.raises(SubjectNotFound):
            listings.replies_for(interpretation.id)


class TestInboundReferences:
    def test_inbound_references(self, listings, service, author, verses) -> None:
        text = "[Genesis 1:1] (context) " + TWELVE_WORDS
        submitted = service.submit_interpretation(author, verses["gen_1_3"].id, text)

        (view,) = listings.inbound_references(verses["gen_1_1"].id)
        assert view.source.id == verses["gen_1_3"].id
        assert view.reference.reference_text == "context"

        service.delete_interpretation(author, submitted.interpretation.id)
        assert listings.inbound_references(verses["gen_1_1"].id) == []


class TestProfile:
    @pytest.mark.parametrize("username", ["lion", "@lion"])
    def test_profile_by_username(self, listings, profiles, interpretation, username) -> None:
        view = listings.profile(username)
        assert view.profile.user_id == "user-author"
        assert [item.interpretation.id for item in view.interpretations] == [interpretation.id]

    def test_unknown_profile(self, listings, profiles) -> None:
        with pytest.raises(SubjectNotFound):
            listings.profile("@nobody")
