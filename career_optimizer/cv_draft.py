"""Presentation helpers for a generated CV draft."""

CANVA_TEMPLATES_URL = "https://www.canva.com/resumes/templates/"
PLACEHOLDER_NAME = "Your Name Here"


def toggle_skill(selected: list[str], name: str) -> list[str]:
    """Add `name` to the selection, or remove it if already selected."""
    if name in selected:
        return [s for s in selected if s != name]
    return [*selected, name]


def selected_skills(names) -> list[str]:
    """Build a selection from a client-supplied list, dropping duplicates and non-strings."""
    selected: list[str] = []
    for name in names:
        if isinstance(name, str) and name.strip() and name not in selected:
            selected = toggle_skill(selected, name)
    return selected


def expertise(draft: dict, selected=()) -> list[str]:
    """Core competencies followed by the selected suggested skills not already listed."""
    items = list(draft["cvSections"]["coreCompetencies"])
    seen = {c.lower() for c in items}
    for skill in selected:
        if skill.lower() not in seen:
            items.append(skill)
            seen.add(skill.lower())
    return items


def draft_to_markdown(draft: dict, target_job: str, selected=()) -> str:
    """Render the CV mock-up as markdown (# name, ## sections, #### roles, - bullets)."""
    sections = draft["cvSections"]
    lines = [f"# {PLACEHOLDER_NAME}", target_job.strip().upper(), ""]

    lines += ["## Professional Profile", sections["professionalSummary"], ""]

    lines.append("## Career Highlights")
    for exp in sections["experience"]:
        lines.append(f"#### {exp['role']}")
        lines += [f"- {bp}" for bp in exp["bulletPoints"]]
    lines.append("")

    lines.append("## Expertise")
    lines += [f"- {item}" for item in expertise(draft, selected)]
    lines.append("")

    lines.append("## Focus Projects")
    for proj in sections["keyProjects"]:
        lines.append(f"**{proj['title']}**: {proj['description']}")
    lines.append("")

    if draft.get("canvaLogic"):
        lines += ["## Final Step: Visual Identity", draft["canvaLogic"], f"Templates: {CANVA_TEMPLATES_URL}"]

    return "\n".join(lines).strip() + "\n"
