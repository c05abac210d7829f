"""Markdown report assembly: business context, review insights, ad copy, marketing copy, image ad."""

from rta.jobs.models import Job, JobStatus
from rta.schemas.models import PlainCopy, StructuredCopy


def _bullets(items: list[str]) -> list[str]:
    if not items:
        return ["- _none_\n"]
    return [f"- {item}\n" for item in items]


def _render_marketing_copy(copy: PlainCopy | StructuredCopy) -> list[str]:
    if isinstance(copy, PlainCopy):
        return [copy.text + "\n"]
    out: list[str] = []
    s = copy.campaign_summary
    out.append(f"- **Objective:** {s.campaign_objective}\n")
    out.append(f"- **Audience:** {s.target_audience}\n")
    out.append(f"- **Key emotion:** {s.key_emotion}\n")
    out.append(f"- **Proof source:** {s.proof_source}\n\n")
    out.append("**Headlines**\n\n")
    out.extend(_bullets(copy.headlines))
    if copy.subheadline:
        out.append(f"\n*{copy.subheadline}*\n\n")
    if copy.core_copy:
        out.append(copy.core_copy + "\n\n")
    out.append("**Value points**\n\n")
    out.extend(_bullets(copy.value_points))
    if copy.social_proof:
        out.append(f"\n> {copy.social_proof}\n\n")
    out.append("**CTAs**\n\n")
    out.extend(_bullets(copy.ctas))
    return out


def render_job_markdown(job: Job, include_image: bool = True) -> str:
    """Assemble a single Markdown document for a completed job."""
    if job.status != JobStatus.COMPLETED or job.outputs is None or job.insights is None:
        raise ValueError(f"Job {job.id} is not completed (status={job.status.value})")

    form = job.form_data
    insights = job.insights
    outputs = job.outputs
    sections: list[str] = []

    sections.append(f"# Ad content for {form.business_name}\n")
    sections.append(f"**Job:** `{job.id}`  \n")
    sections.append(f"**Business type:** {', '.join(form.business_type)}  \n")
    sections.append(f"**Goals:** {', '.join(form.marketing_goal)}  \n")
    sections.append(f"**Audience:** {', '.join(form.target_audience)}  \n")
    sections.append(f"**Platforms:** {', '.join(form.advertising_platform)}  \n")
    sections.append(f"**Tone:** {', '.join(form.brand_tone)}\n")
    sections.append("---\n")

    # 1) Review insights
    sections.append(f"## 1. Review Insights ({insights.review_count} reviews)\n")
    for title, items in (
        ("Key benefits", insights.key_benefits),
        ("Trust signals", insights.trust_signals),
        ("Repeated phrases", insights.repeated_phrases),
        ("Customer emotions", insights.customer_emotions),
        ("Important keywords", insights.important_keywords),
    ):
        sections.append(f"### {title}\n")
        sections.extend(_bullets(items))
        sections.append("\n")
    sections.append("---\n")

    # 2) Ad copy
    ad = outputs.ad_copy
    sections.append("## 2. Ad Copy\n")
    sections.append("### Headlines\n")
    sections.extend(_bullets(ad.headlines))
    sections.append("\n### Body copy\n")
    sections.extend(_bullets(ad.body_copy))
    sections.append("\n### Proof phrases\n")
    sections.extend(_bullets(ad.proof_phrases))
    sections.append(f"\n**CTA:** {ad.cta}\n")
    sections.append("---\n")

    # 3) Marketing copy
    sections.append("## 3. Marketing Copy\n")
    sections.extend(_render_marketing_copy(outputs.marketing_copy))
    sections.append("---\n")

    # 4) Image ad
    if outputs.image_ad is not None:
        img = outputs.image_ad
        sections.append("## 4. Image Ad\n")
        sections.append(f"- **Headline:** {img.headline}\n")
        sections.append(f"- **Subheadline:** {img.subheadline}\n")
        sections.append(f"- **CTA:** {img.cta}\n")
        sections.append(f"- **Design style:** {img.design_style}\n")
        if include_image and img.image_url:
            sections.append(f"\n![Ad image]({img.image_url})\n")

    return "\n".join(sections)
