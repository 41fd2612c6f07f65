"""Tests for collection loading and twin matching."""

import pytest

from core.domain.errors import CollectionLoadError, DeathbatNotFoundError
from core.domain.models import Attribute
from core.services.collection import DeathbatCollection, describe, is_one_of_one, similarity

from conftest import make_deathbat


def test_load_reads_every_deathbat(collection_file):
    collection = DeathbatCollection.load(collection_file)

    assert len(collection) == 4
    assert collection.get(1).traits.mask == "Skull"
    assert collection.get(4).traits.shadows == "M. Shadows"


def test_load_missing_file(tmp_path):
    with pytest.raises(CollectionLoadError):
        DeathbatCollection.load(tmp_path / "missing.json")


def test_load_invalid_json(tmp_path):
    path = tmp_path / "deathbats.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(CollectionLoadError):
        DeathbatCollection.load(path)


def test_load_rejects_wrong_shape(tmp_path):
    path = tmp_path / "deathbats.json"
    path.write_text('[{"name": "no id"}]', encoding="utf-8")
    with pytest.raises(CollectionLoadError):
        DeathbatCollection.load(path)


def test_get_falls_back_to_scan_when_unordered():
    collection = DeathbatCollection([make_deathbat(3), make_deathbat(1), make_deathbat(2)])

    assert collection.get(1).id == 1
    assert collection.get(3).id == 3
    with pytest.raises(DeathbatNotFoundError):
        collection.get(9)


def test_similarity_counts_only_non_empty_source_traits():
    source = make_deathbat(1, mask="Skull", eyes="")
    candidate = make_deathbat(2, mask="Skull", eyes="")

    assert similarity(source, candidate) == 6


def test_highest_weight_wins():
    source = make_deathbat(10, mask="Skull", eyes="Red", background="Black")
    collection = DeathbatCollection(
        [
            source,
            make_deathbat(11, eyes="Red", background="Black"),  # 5
            make_deathbat(500, mask="Skull"),  # 6
        ]
    )

    assert collection.find_twin(source).id == 500


def test_tie_picks_closest_id():
    source = make_deathbat(5, mask="Skull")
    collection = DeathbatCollection(
        [make_deathbat(1, mask="Skull"), source, make_deathbat(7, mask="Skull")]
    )

    assert collection.find_twin(source).id == 7


def test_tie_at_equal_distance_keeps_first_seen():
    source = make_deathbat(5, mask="Skull")
    collection = DeathbatCollection(
        [make_deathbat(4, mask="Skull"), source, make_deathbat(6, mask="Skull")]
    )

    assert collection.find_twin(source).id == 4


def test_one_of_one_is_its_own_twin():
    source = make_deathbat(4, shadows="M. Shadows", mask="Skull")
    collection = DeathbatCollection([source, make_deathbat(5, mask="Skull")])

    assert is_one_of_one(source)
    assert collection.find_twin(source) is source


def test_no_matching_trait_is_its_own_twin():
    source = make_deathbat(2, mask="Gold")
    collection = DeathbatCollection([make_deathbat(1, mask="Skull"), source, make_deathbat(3)])

    assert collection.find_twin(source) is source


def test_describe_lists_attributes():
    deathbat = make_deathbat(8).model_copy(
        update={
            "attributes": [
                Attribute(trait_type="Mask", value="Skull"),
                Attribute(trait_type="Eyes", value="Red"),
            ]
        }
    )

    text = describe(deathbat)

    assert text.startswith("Deathbat #8\nMask: Skull, Eyes: Red\n")
    assert "Owner: owner-8" in text
    assert "OpenSea.io link: https://opensea.io/" in text
