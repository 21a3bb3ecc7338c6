"""
Tests for SpecificationRepository.

Covers defaults, persistence format, corrupt data recovery and every
editing operation (update, pages, feature flags, template, theme).
"""

import json

import pytest

from webmaker.core.exceptions import DeserializationFailure, UnknownFeatureFlag, UnknownTemplate
from webmaker.schemas.spec import (
    DEFAULT_PAGES,
    FeatureFlags,
    FeatureFlagsUpdate,
    SeoSettings,
    SeoSettingsUpdate,
    Specification,
    SpecificationUpdate,
)
from webmaker.storage import SpecificationRepository


# ---------------------------------------------------------------------------
# LOAD / SAVE
# ---------------------------------------------------------------------------

class TestLoadSave:

    def test_load_without_saved_spec_returns_defaults(self, spec_repository):
        spec = spec_repository.load()

        assert spec.project_name == "Untitled Project"
        assert spec.brief == ""
        assert spec.provider == "chatgpt"
        assert spec.template_id == "clean-landing"
        assert spec.layout == "landing"
        assert spec.style == "minimal"
        assert spec.theme == "light"
        assert spec.primary_color == "#2f6feb"
        assert spec.pages == DEFAULT_PAGES
        assert spec.include == FeatureFlags(
            cms=False, auth=False, contact_form=True,
            newsletter=True, analytics=True, image_gen=False,
        )
        assert spec.seo == SeoSettings(title="", description="", keywords="")
        assert spec.tone == "neutral"

    def test_default_pages_are_not_shared(self):
        first = Specification()
        first.pages.append("Extra")
        assert "Extra" not in Specification().pages

    def test_save_persists_camel_case_json(self, spec_repository, backend):
        spec_repository.save(Specification(project_name="Acme", primary_color="#ff0000"))

        stored = json.loads(backend.get("aiwm/spec"))
        assert stored["projectName"] == "Acme"
        assert stored["primaryColor"] == "#ff0000"
        assert stored["include"]["contactForm"] is True
        assert "project_name" not in stored

    def test_save_then_load(self, spec_repository, acme_spec):
        spec_repository.save(acme_spec)
        assert spec_repository.load() == acme_spec

    def test_corrupt_json_falls_back_to_defaults(self, spec_repository, backend):
        backend.set("aiwm/spec", "{not json")
        assert spec_repository.load() == Specification()

    def test_invalid_shape_falls_back_to_defaults(self, spec_repository, backend):
        backend.set("aiwm/spec", json.dumps({"pages": "not-a-list"}))
        assert spec_repository.load() == Specification()

    @pytest.mark.parametrize("raw", ["{not json", json.dumps({"pages": "not-a-list"}), "[]"])
    def test_decode_raises_deserialization_failure(self, raw):
        with pytest.raises(DeserializationFailure):
            SpecificationRepository._decode(raw)

    def test_partial_spec_is_completed_with_defaults(self, spec_repository, backend):
        backend.set("aiwm/spec", json.dumps({"projectName": "Old", "include": {"cms": True}}))

        spec = spec_repository.load()

        assert spec.project_name == "Old"
        assert spec.include.cms is True
        assert spec.include.image_gen is False
        assert spec.include.contact_form is True
        assert spec.pages == DEFAULT_PAGES

    def test_works_on_sqlalchemy_store(self, sql_store, storage_keys, acme_spec):
        repo = SpecificationRepository(sql_store, storage_keys)
        repo.save(acme_spec)
        assert repo.load().project_name == "Acme"

    def test_reset(self, spec_repository, acme_spec):
        spec_repository.save(acme_spec)
        assert spec_repository.reset() == Specification()
        assert spec_repository.load() == Specification()


# ---------------------------------------------------------------------------
# EDITS
# ---------------------------------------------------------------------------

class TestUpdate:

    def test_update_applies_only_given_fields(self, spec_repository):
        spec = spec_repository.update(SpecificationUpdate(project_name="Acme", brief="Bakery"))

        assert spec.project_name == "Acme"
        assert spec.brief == "Bakery"
        assert spec.style == "minimal"
        assert spec_repository.load() == spec

    def test_update_accepts_camel_case_payload(self, spec_repository):
        changes = SpecificationUpdate.model_validate({"projectName": "Globex", "primaryColor": "#123456"})
        spec = spec_repository.update(changes)

        assert spec.project_name == "Globex"
        assert spec.primary_color == "#123456"

    def test_update_merges_nested_feature_flags(self, spec_repository):
        spec_repository.update(SpecificationUpdate(include=FeatureFlagsUpdate(contact_form=False)))
        spec = spec_repository.update(SpecificationUpdate(include=FeatureFlagsUpdate(cms=True)))

        assert spec.include.cms is True
        assert spec.include.contact_form is False
        assert spec.include.newsletter is True
        assert spec_repository.load() == spec

    def test_update_merges_nested_seo(self, spec_repository):
        spec_repository.update(SpecificationUpdate(seo=SeoSettingsUpdate(title="Acme | Bakery")))
        spec = spec_repository.update(SpecificationUpdate(seo=SeoSettingsUpdate(description="Fresh bread")))

        assert spec.seo == SeoSettings(title="Acme | Bakery", description="Fresh bread", keywords="")

    def test_update_merges_camel_case_nested_payload(self, spec_repository):
        spec_repository.update(SpecificationUpdate.model_validate({"include": {"imageGen": True}}))
        spec = spec_repository.update(SpecificationUpdate.model_validate({"include": {"contactForm": False}}))

        assert spec.include.image_gen is True
        assert spec.include.contact_form is False

    def test_nested_update_can_clear_a_string(self, spec_repository):
        spec_repository.update(SpecificationUpdate(seo=SeoSettingsUpdate(title="T", keywords="k")))
        spec = spec_repository.update(SpecificationUpdate(seo=SeoSettingsUpdate(title="")))

        assert spec.seo.title == ""
        assert spec.seo.keywords == "k"

    def test_empty_update_changes_nothing(self, spec_repository, acme_spec):
        spec_repository.save(acme_spec)
        assert spec_repository.update(SpecificationUpdate()) == acme_spec


class TestTogglePage:

    def test_removes_existing_page(self, spec_repository):
        spec = spec_repository.toggle_page("FAQ")
        assert "FAQ" not in spec.pages
        assert "FAQ" not in spec_repository.load().pages

    def test_appends_missing_page(self, spec_repository):
        spec = spec_repository.toggle_page("Careers")
        assert spec.pages[-1] == "Careers"

    def test_toggle_twice_restores_membership(self, spec_repository):
        spec_repository.toggle_page("Careers")
        spec = spec_repository.toggle_page("Careers")
        assert "Careers" not in spec.pages

    def test_removes_every_duplicate(self, spec_repository):
        spec_repository.save(Specification(pages=["Home", "Blog", "Home"]))
        assert spec_repository.toggle_page("Home").pages == ["Blog"]


class TestToggleInclude:

    @pytest.mark.parametrize("flag", ["contactForm", "contact_form"])
    def test_accepts_both_spellings(self, spec_repository, flag):
        spec = spec_repository.toggle_include(flag)
        assert spec.include.contact_form is False

    def test_toggle_persists(self, spec_repository):
        spec_repository.toggle_include("cms")
        assert spec_repository.load().include.cms is True

        spec_repository.toggle_include("cms")
        assert spec_repository.load().include.cms is False

    def test_unknown_flag_raises(self, spec_repository):
        with pytest.raises(UnknownFeatureFlag):
            spec_repository.toggle_include("blockchain")


class TestPickTemplate:

    def test_known_template(self, spec_repository):
        assert spec_repository.pick_template("saas").template_id == "saas"
        assert spec_repository.load().template_id == "saas"

    def test_unknown_template_raises(self, spec_repository):
        with pytest.raises(UnknownTemplate):
            spec_repository.pick_template("wordpress")
        assert spec_repository.load().template_id == "clean-landing"


# ---------------------------------------------------------------------------
# THEME
# ---------------------------------------------------------------------------

class TestTheme:

    def test_defaults_to_light(self, spec_repository):
        assert spec_repository.load_theme() == "light"

    def test_falls_back_to_spec_theme(self, spec_repository):
        spec_repository.save(Specification(theme="dark"))
        assert spec_repository.load_theme() == "dark"

    def test_stored_preference_wins(self, spec_repository, backend):
        spec_repository.save(Specification(theme="dark"))
        spec_repository.save_theme("light")

        assert spec_repository.load_theme() == "light"
        assert backend.get("aiwm/theme") == "light"
