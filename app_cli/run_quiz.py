from __future__ import annotations
import argparse, logging
from quiz_core.engine import QuizSession
from quiz_core.progress import quiz_summary
def ask(prompt: str, options) -> str | None:
    """Return the chosen option value, or None when the user asks to go back."""
    print(prompt)
    for i,opt in enumerate(options): print(f"  [{i}] {opt.text}")
    while True:
        v = input("Your choice (index, or 'b' to go back): ").strip().lower()
        if v == "b": return None
        if v.isdigit() and int(v) < len(options): return options[int(v)].value
        print("Enter a number index.")
def main(argv=None, bank=None):
    ap = argparse.ArgumentParser(description="Career skill quiz")
    ap.add_argument("--user", help="save the result for this user id")
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="[%(levelname)s] %(message)s")
    print("Career Skill Quiz")
    session = QuizSession(bank)
    while not session.done:
        q = session.current()
        print(f"\n({session.progress():.0f}% done)")
        v = ask(q.text, q.options) if q.options else input(q.text + " ").strip()
        if v is None:
            session.go_back(); continue
        session.answer_current(v)
    res = session.finalize()
    print(f"\nBadge: {res.badge.name} - {res.badge.description}")
    print(res.summary)
    print("Skill levels: " + ", ".join(f"{k}={v}" for k,v in res.skill_levels.items()))
    print("Courses: " + ", ".join(res.recommended_courses))
    print("Mentors: " + ", ".join(res.recommended_mentors))
    print("Learning paths: " + ", ".join(res.recommended_paths))
    stats = quiz_summary(res.answers, session.bank)
    print(f"Answered {stats['questions_answered']} questions ({stats['completion_status']}).")
    if args.user:
        from api.storage import persist_everywhere
        saved = persist_everywhere(res, res.answers, args.user)
        print("Saved." if all(saved.values()) else f"Result not fully saved: {saved}")
    return res
if __name__ == "__main__": main()
