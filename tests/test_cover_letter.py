from jobagent.cover_letter import compose_cover_letter
from jobagent.models import Contact, JobPosting, ParsedResume


def _job(**kw) -> JobPosting:
    defaults = dict(
        job_id="1", title="Frontend Engineer", company="Northwind", location="Remote",
        url="https://example.com/1", workplace_type="Remote",
    )
    defaults.update(kw)
    return JobPosting(**defaults)


def test_full_letter(resume):
    letter = compose_cover_letter(resume, _job())
    assert letter.split("\n\n") == [
        "Hi Northwind,",
        "Jane here, an applicant for the Frontend Engineer role.",
        "I bring hands-on strength in react, typescript, node, graphql that map tightly to the scope outlined.",
        "Recent highlights:\n"
        "1. Built React dashboards used by 40k customers.\n"
        "2. Led migration from JavaScript to TypeScript across six services.",
        "Comfortable with the remote setup. Ready to move quickly on next steps. Thanks for the consideration!",
    ]


def test_sparse_letter_skips_empty_segments():
    resume = ParsedResume(raw_text="", contact=Contact())
    letter = compose_cover_letter(resume, _job(company="", workplace_type=None))
    assert letter == (
        "Hi there,\n\n"
        "I'm an applicant for the Frontend Engineer role.\n\n"
        "Ready to move quickly on next steps. Thanks for the consideration!"
    )


def test_letter_is_deterministic(resume):
    assert compose_cover_letter(resume, _job()) == compose_cover_letter(resume, _job())


def test_nameless_resume_opens_in_first_person(resume):
    nameless = ParsedResume(
        raw_text="",
        keywords=resume.keywords,
        experience_highlights=resume.experience_highlights,
        contact=Contact(email="jane.doe@example.com"),
    )
    intro = compose_cover_letter(nameless, _job()).split("\n\n")[1]
    assert intro == "I'm an applicant for the Frontend Engineer role."
    assert " here" not in intro
