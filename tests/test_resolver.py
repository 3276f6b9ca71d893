"""
Test: Template resolver: legacy markers, placeholder filling, render context and composition.
"""
from classroom_hub.services.resolver import (
    Selection, build_context, compose, fill_template, normalize_placeholders,
    placeholders_in, pronouns_from_gender, split_pronouns, strip_markers, student_guardians,
)

STUDENT = {
    "first": "sam",
    "last": "Rivera",
    "grade": 5,
    "gender": "female",
    "parents": [
        {"name": "Alex Rivera", "email": "alex@example.com", "phone": "555-0101", "relationship": "Mother"},
        {"name": "Jo Rivera", "email": "jo@example.com", "relationship": "Father"},
    ],
    "enrollments": [{"classroom": {"name": "Grade 5 Homeroom"}}],
}

EVERY_PLACEHOLDER = (
    "{{first}} {{First}} {{last}} {{grade}} {{gender}} {{pronouns}} "
    "{{they}} {{them}} {{their}} {{theirs}} {{themselves}} "
    "{{They}} {{Them}} {{Their}} {{Theirs}} {{Themselves}} "
    "{{guardian_name}} {{guardian_email}} {{guardian_phone}} {{guardian_relationship}} "
    "{{subject_or_class}} {{teacher_name}} {{term}} "
    "{{student_first}} {{student_last}} {{he_she}} {{him_her}} {{his_her}} "
    "{Name} {name} {HeSheThey} {heSheThey} {heshethey} {himherthem} {hishertheir} "
    "{his/hertheir} {himselfherselfthemselves} {GRADE} {{ unknown_key }}"
)


class TestNormalizePlaceholders:
    def test_name(self):
        assert normalize_placeholders("{Name} reads daily.") == "{{first}} reads daily."

    def test_pronouns(self):
        text = "{HeSheThey} asks; {heSheThey} helps {himherthem} with {hishertheir} work to reach {himselfherselfthemselves} potential."
        assert normalize_placeholders(text) == (
            "{{They}} asks; {{they}} helps {{them}} with {{their}} work to reach {{their}} potential."
        )

    def test_grade_removed(self):
        assert normalize_placeholders("Grade {GRADE} work") == "Grade  work"

    def test_double_braces_untouched(self):
        assert normalize_placeholders("{{name}}") == "{{name}}"

    def test_placeholders_in(self):
        assert placeholders_in("{Name} and {{ first }} and {{their}}") == ["first", "their"]


class TestFillTemplate:
    def test_round_trip_leaves_no_tokens(self):
        context = build_context(STUDENT, subject="Math", term="T1", teacher_name="Ms. Lee")
        out = fill_template(normalize_placeholders(EVERY_PLACEHOLDER), context)
        assert "{{" not in out
        assert "}}" not in out
        assert "{Name}" not in out

    def test_whitespace_tolerant(self):
        assert fill_template("Hi {{  first  }}!", {"first": "Sam"}) == "Hi Sam!"

    def test_missing_is_empty(self):
        assert fill_template("Hi {{first}}!", {}) == "Hi !"

    def test_none_context(self):
        assert fill_template("{{first}}", None) == ""

    def test_legacy_marker_filled(self):
        assert fill_template("{Name} shares {hishertheir} ideas.", build_context(STUDENT)) == "sam shares her ideas."

    def test_reflexive_marker_reads_possessive(self):
        ctx = build_context({"first": "Sam", "pronouns": "she/her/her"})
        assert fill_template("Aim to maximize {himselfherselfthemselves} potential.", ctx) == (
            "Aim to maximize her potential."
        )


class TestPronouns:
    def test_default(self):
        forms = split_pronouns(None)
        assert (forms["they"], forms["them"], forms["their"], forms["theirs"]) == ("they", "them", "their", "theirs")
        assert forms["themselves"] == "themselves"

    def test_he(self):
        forms = split_pronouns("He/Him/His")
        assert forms["theirs"] == "his"
        assert forms["Themselves"] == "Himself"
        assert forms["They"] == "He"

    def test_she(self):
        forms = split_pronouns("she/her/her")
        assert forms["theirs"] == "hers"
        assert forms["themselves"] == "herself"

    def test_missing_parts(self):
        forms = split_pronouns("ze")
        assert (forms["they"], forms["them"], forms["their"]) == ("ze", "them", "their")

    def test_from_gender(self):
        assert pronouns_from_gender("Male") == "he/him/his"
        assert pronouns_from_gender("nonbinary") == "they/them/their"
        assert pronouns_from_gender("unknown") == ""


class TestBuildContext:
    def test_core_keys(self):
        ctx = build_context(STUDENT)
        assert ctx["first"] == "sam"
        assert ctx["First"] == "Sam"
        assert ctx["grade"] == "5"
        assert ctx["they"] == "she"
        assert ctx["student_first"] == "sam"
        assert ctx["his_her"] == "her"

    def test_guardian_by_email(self):
        ctx = build_context(STUDENT, target_guardian_email="jo@example.com")
        assert ctx["guardian_name"] == "Jo Rivera"
        assert ctx["guardian_relationship"] == "Father"

    def test_guardian_defaults_to_first(self):
        assert build_context(STUDENT)["guardian_name"] == "Alex Rivera"

    def test_subject_or_class(self):
        assert build_context(STUDENT)["subject_or_class"] == "Grade 5 Homeroom"
        assert build_context(STUDENT, subject=" Science ")["subject_or_class"] == "Science"
        assert build_context({})["subject_or_class"] == "class"

    def test_teacher_default(self):
        assert build_context({})["teacher_name"] == "Teacher"

    def test_extras_override(self):
        assert build_context(STUDENT, extra={"next_step": "reading", "first": "Samantha"})["first"] == "Samantha"

    def test_guardian_links(self):
        student = {"links": [{"relationship": "Aunt", "guardian": {"name": "Pat", "email": "pat@example.com"}}]}
        assert student_guardians(student) == [
            {"name": "Pat", "email": "pat@example.com", "phone": None, "relationship": "Aunt"},
        ]


class TestComposition:
    def test_strip_emoji_prefix(self):
        assert strip_markers("🟢 {{First}} has grown.") == "{{First}} has grown."

    def test_strip_level_marker(self):
        assert strip_markers("🟡 [NextSteps] Practice daily.") == "Practice daily."

    def test_keeps_quotes(self):
        assert strip_markers('"Great work," said Sam.') == '"Great work," said Sam.'

    def test_compose_drops_empties(self):
        assert compose(["{{first}} reads.", "  ", "[E] ", "{{first}} writes."], {"first": "Sam"}) == (
            "Sam reads. Sam writes."
        )

    def test_move_to_front(self):
        texts = {
            "a": "{{first}} listens well.",
            "b": "{{They}} asks questions.",
            "c": "Welcome back, {{first}}.",
        }
        ctx = build_context({"first": "Sam", "pronouns": "he/him/his"})
        selection = Selection().add("a").add("b").add("c").move(2, 0)
        assert list(selection) == ["c", "a", "b"]
        expected = " ".join(fill_template(texts[i], ctx) for i in ("c", "a", "b"))
        assert compose([texts[i] for i in selection], ctx) == expected

    def test_selection_moves(self):
        selection = Selection(["a", "b", "c"])
        selection.move_up(0).move_down(0)
        assert list(selection) == ["b", "a", "c"]
        selection.remove(5).remove(1)
        assert list(selection) == ["b", "c"]
        assert len(selection) == 2
