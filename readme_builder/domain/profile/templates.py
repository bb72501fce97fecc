"""README 템플릿 상수

렌더러가 str.format으로 채우는 Markdown/HTML 조각과 고정 아이콘 목록
"""

DEVICON_BASE = "https://cdn.jsdelivr.net/gh/devicons/devicon/icons"

# (경로, alt) - 6개씩 한 줄로 렌더링
SKILL_ICONS = [
    ("cplusplus/cplusplus-original.svg", "C++"),
    ("c/c-original.svg", "C"),
    ("rust/rust-original.svg", "Rust"),
    ("python/python-original.svg", "Python"),
    ("java/java-original.svg", "Java"),
    ("typescript/typescript-original.svg", "TypeScript"),
    ("javascript/javascript-original.svg", "JavaScript"),
    ("bash/bash-original.svg", "Bash"),
    ("react/react-original.svg", "React"),
    ("nextjs/nextjs-original.svg", "Next.js"),
    ("bootstrap/bootstrap-original.svg", "Bootstrap"),
    ("tailwindcss/tailwindcss-original.svg", "Tailwind CSS"),
    ("django/django-plain.svg", "Django"),
    ("pytorch/pytorch-original.svg", "PyTorch"),
    ("tensorflow/tensorflow-original.svg", "TensorFlow"),
    ("opencv/opencv-original.svg", "OpenCV"),
    ("docker/docker-original.svg", "Docker"),
    ("kubernetes/kubernetes-plain.svg", "Kubernetes"),
    ("linux/linux-original.svg", "Linux"),
    ("nginx/nginx-original.svg", "Nginx"),
    ("postgresql/postgresql-original.svg", "PostgreSQL"),
    ("mysql/mysql-original.svg", "MySQL"),
    ("mongodb/mongodb-original.svg", "MongoDB"),
    ("redis/redis-original.svg", "Redis"),
]
SKILL_GRID_COLUMNS = 6
SKILL_ICON_SIZE = 42

SKILL_CELL = (
    '<td align="center" width="100" height="80">'
    '<img src="{src}" width="{size}" height="{size}" alt="{alt}"/></td>'
)

TYPING_BANNER = """<p align="left">
  <img src="https://readme-typing-svg.demolab.com?font=Fira+Code&weight=600&size=24&duration=2300&pause=600&center=false&vCenter=true&repeat=true&width=720&lines={lines}" alt="typing" />
</p>"""

STATS_CARD_WIDTH = 720
STATS_CARDS = """<p align="left">
  <img src="https://github-readme-stats.vercel.app/api/top-langs/?username={login}&layout=compact&langs_count=8&theme=tokyonight&card_width={width}" height="190" alt="Most used languages"/>
</p>
<p align="left">
  <img src="https://github-readme-stats.vercel.app/api?username={login}&show_icons=true&include_all_commits=true&hide_title=true&theme=tokyonight&hide=stars,issues,contribs&card_width={width}" height="190" alt="Stats (commits + PRs)"/>
</p>"""

SNAKE = """### 🐍 Snake
<p align="left">
  <img src="https://raw.githubusercontent.com/{login}/{login}/main/assets/snake.svg" alt="snake"/>
</p>"""

SHIELDS_BASE = "https://img.shields.io/github"
ACTIVE_PROJECTS_HEADER = """| Repo | Language | Last commit | Commits/month | Size |
|---|---|---|---|---|"""
ACTIVE_PROJECT_ROW = (
    "| {repo} | ![lang]({shields}/languages/top/{owner}/{name}?style=flat-square) "
    "| ![last]({shields}/last-commit/{owner}/{name}?style=flat-square&label=last%20commit) "
    "| ![act]({shields}/commit-activity/m/{owner}/{name}?style=flat-square&label=commits%2Fmonth) "
    "| ![size]({shields}/repo-size/{owner}/{name}?style=flat-square&label=size) |"
)

PULL_REQUEST_ITEM = "- {link} — `{repo}` — {state} — {date}"
COMMIT_ITEM = "- {link} — `{repo}` — {date}"
COMMIT_MESSAGE_MAX_LENGTH = 80

EMPTY_PULL_REQUESTS_MESSAGE = "_No recent public pull requests._"
EMPTY_COMMITS_MESSAGE = "_No recent public commits._"
EMPTY_LANGUAGES_MESSAGE = "_Will fill in automatically as repositories get activity._"

LANGUAGE_TABLE = """> Aggregated **bytes per language** across your repositories (GitHub does not count lines).

| Language | % | Bytes |
|---|---:|---:|
{rows}"""
LANGUAGE_ROW = "| {language} | {percent} | {byte_count} |"

README = """<!-- Profile: {login} — dark, clean, compact -->
<h1 align="left">{display_name}</h1>
<p align="left">
{bio}
</p>
{typing}

---

### ⚙️ Skills
{skills}

---

### 📈 GitHub Stats (commits + PRs)
{cards}

{snake}

---

### 🛠️ Active projects (latest {active_count} repos)
{active_projects}

---

### 🔀 Recent pull requests
{pull_requests}

---

### 📝 Recent commits
{commits}

---

### 🧠 Most used languages
{languages}

---

### 📬 Contact
- Email: <a href="mailto:{email}">{email}</a>
- GitHub: {profile_link}

<sub>{footer}</sub>"""

FOOTER_WITH_ACTIVITY = "Generated automatically. Last activity on {date}."
FOOTER_WITHOUT_ACTIVITY = "Generated automatically."
