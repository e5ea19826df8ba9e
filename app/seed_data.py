"""
Demo content used by the seed script, the default profile and the client
store's offline fallback.

Values use model attribute names (snake_case); dates are timezone-aware UTC.
"""
from datetime import datetime, timezone

from app.utils.helpers import slugify


def _date(value: str) -> datetime:
    return datetime.strptime(value, "%Y-%m-%d").replace(tzinfo=timezone.utc)


DEFAULT_PROFILE = {
    "full_name": "Alex Morgan",
    "title": "Data Analyst & ML Engineer",
    "bio": (
        "Data analyst working on machine learning, automation and data "
        "visualization. I build reporting pipelines, predictive models and "
        "interactive dashboards that help teams make data-driven decisions."
    ),
    "short_bio": "Data analyst specializing in ML, automation and visualization.",
    "location": "Kathmandu, Nepal",
    "email": "hello@example.com",
    "phone": None,
    "profile_pic": None,
    "resume": None,
    "social_links": {
        "github": "https://github.com/example",
        "linkedin": "https://linkedin.com/in/example",
    },
}

SKILLS = [
    {"name": "Python", "level": 95, "category": "Programming", "order": 1},
    {"name": "SQL", "level": 90, "category": "Programming", "order": 2},
    {"name": "R", "level": 85, "category": "Programming", "order": 3},
    {"name": "JavaScript", "level": 80, "category": "Programming", "order": 4},
    {"name": "Pandas", "level": 95, "category": "Data Science", "order": 1},
    {"name": "NumPy", "level": 90, "category": "Data Science", "order": 2},
    {"name": "Scikit-learn", "level": 88, "category": "Machine Learning", "order": 1},
    {"name": "TensorFlow", "level": 82, "category": "Machine Learning", "order": 2},
    {"name": "PyTorch", "level": 78, "category": "Machine Learning", "order": 3},
    {"name": "Matplotlib", "level": 92, "category": "Visualization", "order": 1},
    {"name": "Plotly", "level": 88, "category": "Visualization", "order": 2},
    {"name": "Git", "level": 90, "category": "Tools", "order": 1},
    {"name": "Docker", "level": 85, "category": "Tools", "order": 2},
    {"name": "PostgreSQL", "level": 85, "category": "Database", "order": 1},
]

EXPERIENCE = [
    {
        "title": "Senior Data Analyst",
        "company": "Northwind Analytics",
        "location": "Kathmandu, Nepal",
        "start_date": _date("2022-03-01"),
        "end_date": None,
        "current": True,
        "description": (
            "Leading data analysis initiatives and machine learning projects. "
            "Built an automated reporting system that replaced 15 hours of manual work a week."
        ),
        "order": 1,
    },
    {
        "title": "Data Analyst",
        "company": "Summit Tech",
        "location": "Kathmandu, Nepal",
        "start_date": _date("2020-06-01"),
        "end_date": _date("2022-02-28"),
        "current": False,
        "description": "Built dashboards and automated monthly reporting with Python and SQL.",
        "order": 2,
    },
    {
        "title": "Junior Data Scientist",
        "company": "DataWorks",
        "location": "Kathmandu, Nepal",
        "start_date": _date("2018-08-01"),
        "end_date": _date("2020-05-31"),
        "current": False,
        "description": "Predictive modelling, data cleaning and visualization reports.",
        "order": 3,
    },
]

EDUCATION = [
    {
        "institution": "Tribhuvan University",
        "degree": "Master of Science",
        "field": "Computer Science",
        "location": "Kathmandu, Nepal",
        "start_date": _date("2016-08-01"),
        "end_date": _date("2018-05-31"),
        "current": False,
        "description": "Focused on machine learning and data mining.",
        "order": 1,
    },
    {
        "institution": "Kathmandu University",
        "degree": "Bachelor of Science",
        "field": "Computer Science",
        "location": "Dhulikhel, Nepal",
        "start_date": _date("2012-08-01"),
        "end_date": _date("2016-05-31"),
        "current": False,
        "description": "Software engineering and database systems.",
        "order": 2,
    },
]

PROJECTS = [
    {
        "title": "Tourism Analytics Dashboard",
        "description": (
            "Interactive dashboard analyzing tourism trends with Pandas and Plotly: "
            "visitor statistics, regional analysis and seasonal patterns."
        ),
        "content": (
            "# Tourism Analytics Dashboard\n\n"
            "Tracks arrivals by country, month and region, and highlights peak seasons.\n\n"
            "## Stack\n\n- Python, Pandas\n- Plotly, Seaborn\n- Streamlit\n"
        ),
        "cover_image": None,
        "github_url": "https://github.com/example/tourism-dashboard",
        "demo_url": None,
        "featured": True,
        "tags": ["Python", "Pandas", "Plotly", "Data Analysis"],
        "order": 1,
    },
    {
        "title": "Crop Yield Prediction",
        "description": (
            "Model predicting crop yields from weather, soil and historical data. "
            "Built with scikit-learn and served with FastAPI."
        ),
        "content": (
            "# Crop Yield Prediction\n\n"
            "Random forest yield prediction and XGBoost crop recommendation behind a REST API.\n"
        ),
        "cover_image": None,
        "github_url": "https://github.com/example/crop-yield",
        "demo_url": None,
        "featured": True,
        "tags": ["Machine Learning", "Python", "scikit-learn", "FastAPI"],
        "order": 2,
    },
    {
        "title": "Automated Reporting System",
        "description": "Scheduled ETL and report generation that replaced a manual weekly process.",
        "content": (
            "# Automated Reporting System\n\n"
            "Extracts sales data, transforms it with Pandas and mails formatted reports.\n"
        ),
        "cover_image": None,
        "github_url": None,
        "demo_url": None,
        "featured": False,
        "tags": ["Automation", "Python", "SQL"],
        "order": 3,
    },
]

CERTIFICATES = [
    {
        "name": "Data Scientist Professional Certification",
        "issuer": "DataCamp",
        "issue_date": _date("2021-06-15"),
        "credential_id": "DSP-12345",
        "credential_url": None,
        "description": "Machine learning, statistical analysis and data visualization.",
        "image": None,
        "order": 1,
    },
    {
        "name": "TensorFlow Developer Certificate",
        "issuer": "Google",
        "issue_date": _date("2022-02-10"),
        "credential_id": "TF-67890",
        "credential_url": None,
        "description": "Building and deploying machine learning models with TensorFlow.",
        "image": None,
        "order": 2,
    },
]

POSTS = [
    {
        "title": "Introduction to Data Visualization with D3.js",
        "excerpt": "The basics of building interactive visualizations with D3.js.",
        "content": (
            "# Introduction to Data Visualization with D3.js\n\n"
            "D3 binds data to the DOM and gives full control over the resulting chart.\n"
        ),
        "tags": ["Visualization", "JavaScript"],
        "published": True,
    },
    {
        "title": "Machine Learning Techniques for Time Series Analysis",
        "excerpt": "Feature engineering and model choices for forecasting problems.",
        "content": (
            "# Machine Learning for Time Series\n\n"
            "Lag features, rolling windows and walk-forward validation.\n"
        ),
        "tags": ["Machine Learning", "Time Series"],
        "published": True,
    },
    {
        "title": "Automating Data Pipelines with Python",
        "excerpt": "Extract, transform and load on a schedule with plain Python.",
        "content": "# Automating Data Pipelines\n\nDraft.\n",
        "tags": ["Python", "Automation"],
        "published": False,
    },
]


# Offline fallback for the client store (wire-shaped, camelCase keys)
DEMO_PROJECTS = [
    {
        "id": str(i + 1),
        "title": p["title"],
        "slug": slugify(p["title"]),
        "description": p["description"],
        "coverImage": p["cover_image"],
        "githubUrl": p["github_url"],
        "demoUrl": p["demo_url"],
        "featured": p["featured"],
        "tags": list(p["tags"]),
    }
    for i, p in enumerate(PROJECTS)
]

DEMO_SKILLS = [
    {"id": str(i + 1), "name": s["name"], "level": s["level"], "category": s["category"]}
    for i, s in enumerate(SKILLS)
]
