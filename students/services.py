from backend import service
from backend.feedback import load


def students_panel(request):
    profiles = load(request, service.get_all_student_profiles, request.user.principal, default=list)
    rows = sorted(profiles, key=lambda pair: pair[1].name.lower())
    return {"students": rows}
