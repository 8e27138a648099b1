"""Tests for saved verses, prayer points and account deletion."""

import pytest

from lions_bible.core.errors import ContainsMarkup, SubjectNotFound, Unauthenticated, ValidationFailed
from lions_bible.models import Interpretation, PrayerPoint, SavedVerse, UserProfile
from lions_bible.services.accounts import AccountService
from lions_bible.services.actor import ANONYMOUS
from lions_bible.services.devotions import DevotionService


@pytest.fixture()
def devotions(db_session) -> DevotionService:
    return DevotionService(db_session)


class TestSavedVerses:
    def test_save_and_unsave(self, devotions, reader, verse) -> None:
        assert not devotions.is_saved(reader, verse.id)
        assert devotions.save_verse(reader, verse.id) is True
        assert devotions.is_saved(reader, verse.id)
        assert devotions.unsave_verse(reader, verse.id) is False
        assert not devotions.is_saved(reader, verse.id)

    def test_saving_twice_keeps_one_row(self, devotions, reader, verse, db_session) -> None:
        devotions.save_verse(reader, verse.id)
        devotions.save_verse(reader, verse.id)
        assert db_session.query(SavedVerse).count() == 1

    def test_unsave_without_save(self, devotions, reader, verse) -> None:
        assert devotions.unsave_verse(reader, verse.id) is False

    def test_saved_state_is_per_user(self, devotions, author, reader, verse) -> None:
        devotions.save_verse(author, verse.id)
        assert not devotions.is_saved(reader, verse.id)

    def test_saved_verses_newest_first(self, devotions, reader, verses) -> None:
        devotions.save_verse(reader, verses["gen_1_1"].id)
        devotions.save_verse(reader, verses["gen_2_1"].id)
        saved = devotions.saved_verses(reader)
        assert [verse.id for verse in saved] == [verses["gen_2_1"].id, verses["gen_1_1"].id]

    def test_anonymous_cannot_save(self, devotions, verse) -> None:
        with pytest.raises(Unauthenticated):
            devotions.save_verse(ANONYMOUS, verse.id)

    def test_missing_verse(self, devotions, reader) -> None:
        with pytest.raises(SubjectNotFound):
            devotions.save_verse(reader, 424242)


class TestPrayerPoints:
    def test_submit_and_list(self, devotions, author, reader, verse, profiles) -> None:
        first = devotions.submit_prayer(author, verse.id, "Lord give us wisdom")
        devotions.submit_prayer(reader, verse.id, "Amen")
        views = devotions.prayer_points(verse.id)
        assert [view.prayer.id for view in views][0] == first.prayer.id
        assert [view.prayer.prayer_text for view in views] == ["Lord give us wisdom", "Amen"]
        assert views[0].author.username == "lion"
        assert first.author.username == "lion"

    def test_prayer_text_is_gated(self, devotions, author, verse, db_session) -> None:
        with pytest.raises(ContainsMarkup):
            devotions.submit_prayer(author, verse.id, "<script>alert(1)</script>")
        with pytest.raises(ValidationFailed):
            devotions.submit_prayer(author, verse.id, "  ")
        assert db_session.query(PrayerPoint).count() == 0

    def test_markup_is_stripped(self, devotions, author, verse) -> None:
        view = devotions.submit_prayer(author, verse.id, "Give us <b>peace</b>")
        assert view.prayer.prayer_text == "Give us peace"

    def test_anonymous_cannot_pray(self, devotions, verse) -> None:
        with pytest.raises(Unauthenticated):
            devotions.submit_prayer(ANONYMOUS, verse.id, "Amen")

    def test_prayers_for_missing_verse(self, devotions) -> None:
        with pytest.raises(SubjectNotFound):
            devotions.prayer_points(424242)


class TestAccountDeletion:
    def test_removes_personal_data_only(
        self, db_session, devotions, author, reader, verse, profiles, interpretation
    ) -> None:
        devotions.save_verse(author, verse.id)
        devotions.save_verse(reader, verse.id)
        devotions.submit_prayer(author, verse.id, "Amen")

        result = AccountService(db_session).delete_account(author)
        assert (result.profile_removed, result.saved_verses, result.prayer_points) == (True, 1, 1)

        assert db_session.get(UserProfile, author.user_id) is None
        assert db_session.get(UserProfile, reader.user_id) is not None
        assert db_session.query(SavedVerse).count() == 1
        assert db_session.query(PrayerPoint).count() == 0
        assert not db_session.get(Interpretation, interpretation.id).is_hidden

    def test_without_profile(self, db_session, reader) -> None:
        result = AccountService(db_session).delete_account(reader)
        assert not result.profile_removed

    def test_anonymous(self, db_session) -> None:
        with pytest.raises(Unauthenticated):
            AccountService(db_session).delete_account(ANONYMOUS)
