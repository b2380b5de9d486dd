# === report.py ===


def format_term(term, number):
    lines = [f"Term {number}: {term.kind.label} ({term.used_credits}/{term.capacity} credits)"]
    for code, credits in term.assigned:
        lines.append(f"  {code} ({credits} credits)")
    return lines


def format_plan(terms):
    if not terms:
        return "No plan possible."

    blocks = ["\n".join(format_term(term, i)) for i, term in enumerate(terms, 1)]
    return "\n\n".join(blocks)
