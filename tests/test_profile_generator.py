from jobagent.models import Contact, JobPosting, ParsedResume
from jobagent.profile_generator import build_autofill_profile, recommend_responses


def _job(metadata=None) -> JobPosting:
    return JobPosting(
        job_id="7", title="Senior Frontend Engineer", company="Northwind", location="Remote",
        url="https://example.com/7", metadata=dict(metadata or {}),
    )


def test_profile_fields(resume):
    profile = build_autofill_profile(resume, _job(), ["react", "node", "aws", "graphql"])
    assert profile.headline == "Jane Doe · react · node · aws"
    assert profile.summary == (
        "Frontend engineer with eight years building React products "
        "Core strengths: react, node, aws, graphql. "
        "Target role: Senior Frontend Engineer at Northwind."
    )
    assert profile.key_skills == ("react", "node", "aws", "graphql")
    assert profile.experience_bullets[0] == "Built React dashboards used by 40k customers"
    assert len(profile.experience_bullets) == 3


def test_profile_without_name_or_matches():
    resume = ParsedResume(raw_text="", contact=Contact())
    profile = build_autofill_profile(resume, _job(), [])
    assert profile.headline == ""
    assert profile.summary == "Target role: Senior Frontend Engineer at Northwind."
    assert profile.key_skills == ()


def test_key_skills_capped_at_ten(resume):
    matched = [f"skill{i}" for i in range(15)]
    assert len(build_autofill_profile(resume, _job(), matched).key_skills) == 10


def test_responses_follow_metadata(resume):
    job = _job({"Employment type": "Full-time", "Seniority level": "Mid-Senior level"})
    responses = recommend_responses(resume, job, ["react", "node"])
    assert [(r.question, r.answer) for r in responses] == [
        ("Preferred employment type", "Full-time"),
        ("Seniority alignment", "Aligned with Mid-Senior level roles based on 3 notable achievements."),
        ("Key skills fit", "Direct experience with react, node highlighted in CV."),
    ]


def test_no_placeholder_responses(resume):
    assert recommend_responses(resume, _job(), []) == []
