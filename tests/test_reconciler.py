import json

from constraint_extractor.reconciler import DEFAULT_SCORE, parse_bullets, reconcile, reconcile_simple

TEXT = "Books must have a title. Books must have a title and author. Books must not have a title."


def _ids(result):
    ids = [c.id for c in result.constraints]
    for group in result.redundant_groups:
        ids.append(group.id)
        ids.extend(c.id for c in group.constraints)
    for contradiction in result.contradictions:
        ids.extend([contradiction.id, contradiction.constraint1.id, contradiction.constraint2.id])
    return ids


def _assert_well_formed(data, original_text):
    assert set(data) == {"constraints", "redundantGroups", "contradictions", "originalText"}
    assert isinstance(data["constraints"], list)
    assert isinstance(data["redundantGroups"], list)
    assert isinstance(data["contradictions"], list)
    assert data["originalText"] == original_text


def test_well_formed_document_round_trips():
    document = {
        "constraints": [
            {"id": "c1", "text": "Books must have a title", "sourceStart": 0, "sourceEnd": 23},
            {"id": "c2", "text": "Books must not have a title", "sourceStart": 61, "sourceEnd": 88, "category": "format"},
        ],
        "redundantGroups": [
            {
                "id": "g1",
                "constraints": [{"id": "c1", "text": "Books must have a title", "sourceStart": 0, "sourceEnd": 23}],
                "similarity": 0.85,
            }
        ],
        "contradictions": [
            {
                "id": "x1",
                "constraint1": {"id": "c1", "text": "Books must have a title", "sourceStart": 0, "sourceEnd": 23},
                "constraint2": {"id": "c2", "text": "Books must not have a title", "sourceStart": 61, "sourceEnd": 88},
                "explanation": "title required vs forbidden",
                "confidence": 0.9,
            }
        ],
        "originalText": TEXT,
    }
    text = json.dumps(document)

    assert json.dumps(reconcile(text, TEXT).to_dict()) == text


def test_missing_ids_and_scores_are_filled():
    document = {
        "constraints": [{"text": "a"}, {"id": "", "text": "b"}],
        "redundantGroups": [{"constraints": [{"text": "a"}], "similarity": 1.7}],
        "contradictions": [{"constraint1": {"text": "a"}, "constraint2": {"text": "b"}, "confidence": "high"}],
    }
    result = reconcile(json.dumps(document), TEXT)

    assert all(isinstance(i, str) and i for i in _ids(result))
    assert len(set(_ids(result))) == len(_ids(result))
    assert result.redundant_groups[0].similarity == DEFAULT_SCORE
    assert result.contradictions[0].confidence == DEFAULT_SCORE
    assert result.contradictions[0].explanation == ""


def test_scores_always_within_unit_interval():
    document = {
        "redundantGroups": [
            {"constraints": ["a"], "similarity": s} for s in (-0.1, 0, 0.5, 1, 2, None, True, float("nan"))
        ],
        "contradictions": [
            {"constraint1": "a", "constraint2": "b", "confidence": c} for c in (-1, 0.3, 1.01, "0.9")
        ],
    }
    result = reconcile(json.dumps(document), TEXT)

    assert [g.similarity for g in result.redundant_groups] == [0.8, 0, 0.5, 1, 0.8, 0.8, 0.8, 0.8]
    assert [c.confidence for c in result.contradictions] == [0.8, 0.3, 0.8, 0.8]


def test_spans_default_to_whole_text_when_missing_or_invalid():
    document = {
        "constraints": [
            {"text": "no span"},
            {"text": "reversed", "sourceStart": 10, "sourceEnd": 2},
            {"text": "negative", "sourceStart": -4, "sourceEnd": 3},
            {"text": "strings", "sourceStart": "0", "sourceEnd": "5"},
            {"text": "start only", "sourceStart": 7},
        ]
    }
    result = reconcile(json.dumps(document), TEXT)

    spans = [(c.source_start, c.source_end) for c in result.constraints]
    assert spans == [(0, len(TEXT)), (0, len(TEXT)), (0, 3), (0, len(TEXT)), (7, len(TEXT))]
    assert all(start <= end for start, end in spans)


def test_wrong_shaped_fields_become_empty():
    document = {"constraints": "none", "redundantGroups": {"id": "g"}, "contradictions": None, "originalText": 5}
    data = reconcile(json.dumps(document), TEXT).to_dict()

    _assert_well_formed(data, TEXT)
    assert data["constraints"] == data["redundantGroups"] == data["contradictions"] == []


def test_unusable_items_are_dropped_not_the_whole_result():
    document = {
        "constraints": [42, None, "plain string", {"text": "ok"}],
        "redundantGroups": [{"constraints": []}, "junk", {"constraints": [{"text": "ok"}]}],
        "contradictions": [{"constraint1": {"text": "a"}}, {"constraint1": "a", "constraint2": "b"}],
    }
    result = reconcile(json.dumps(document), TEXT)

    assert [c.text for c in result.constraints] == ["plain string", "ok"]
    assert len(result.redundant_groups) == 1
    assert len(result.contradictions) == 1
    assert result.contradictions[0].constraint2.text == "b"


def test_non_object_json_yields_empty_result():
    for answer in ("[1, 2]", "42", "null", '"text"'):
        data = reconcile(answer, TEXT).to_dict()
        _assert_well_formed(data, TEXT)
        assert data["constraints"] == []


def test_prose_without_bullets_yields_empty_collections():
    answer = "I could not find any constraints in this text, sorry."
    data = reconcile(answer, TEXT).to_dict()

    _assert_well_formed(data, TEXT)
    assert data["constraints"] == []
    assert data["redundantGroups"] == []
    assert data["contradictions"] == []


def test_broken_json_falls_back_to_bullets_in_order():
    answer = '{"constraints": [\n- Books must have a title\n* Books must have an author\n• Books need an ISBN\nnot a bullet'
    result = reconcile(answer, TEXT)

    assert [c.text for c in result.constraints] == [
        "Books must have a title",
        "Books must have an author",
        "Books need an ISBN",
    ]
    assert all((c.source_start, c.source_end) == (0, len(TEXT)) for c in result.constraints)
    assert result.redundant_groups == []
    assert result.contradictions == []


def test_empty_answer_and_empty_input():
    data = reconcile("", "").to_dict()
    assert data == {"constraints": [], "redundantGroups": [], "contradictions": [], "originalText": ""}


def test_original_text_is_always_the_request_input():
    document = {"constraints": [], "originalText": "something the model rewrote"}
    assert reconcile(json.dumps(document), TEXT).original_text == TEXT


def test_parse_bullets_ignores_bold_and_rules():
    text = "**Constraints**\n---\n- one\n-two\n  - nested\n*   three  "
    assert parse_bullets(text) == ["one", "nested", "three"]


def test_reconcile_simple_scenario():
    answer = "- Books must have a title\n- Books must have a title and author"

    assert reconcile_simple(answer).to_dict() == {
        "constraints": [
            {"text": "Books must have a title"},
            {"text": "Books must have a title and author"},
        ]
    }


def test_fallback_accepts_markers_without_following_space():
    answer = "-Books must have a title\n•Books must have an author\n*Books need an ISBN\n---\n***"
    result = reconcile(answer, TEXT)

    assert [c.text for c in result.constraints] == [
        "Books must have a title",
        "Books must have an author",
        "Books need an ISBN",
    ]
    assert all(c.id for c in result.constraints)


def test_simple_mode_still_requires_space_after_marker():
    assert reconcile_simple("-tight\n- spaced").to_dict() == {"constraints": [{"text": "spaced"}]}
