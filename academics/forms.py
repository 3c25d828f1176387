from django import forms
from django.utils import timezone

FILL_ALL = "Please fill in all fields"
FILL_REQUIRED = "Please fill in all required fields"


def _require_all(form, message):
    for field in form.fields.values():
        if field.required:
            field.error_messages["required"] = message


class CourseForm(forms.Form):
    title = forms.CharField(max_length=200)
    description = forms.CharField(widget=forms.Textarea(attrs={"rows": 3}))
    instructor = forms.CharField(max_length=200)
    schedule = forms.CharField(max_length=200)
    monthly_fee = forms.IntegerField(min_value=0, label="Monthly fee")

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        _require_all(self, FILL_ALL)


class _StudentCourseForm(forms.Form):
    student = forms.ChoiceField(choices=())
    course = forms.TypedChoiceField(choices=(), coerce=int)

    def __init__(self, *args, students=(), courses=(), **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["student"].choices = [("", "Select student")] + [
            (str(principal), profile.name) for principal, profile in students
        ]
        self.fields["course"].choices = [("", "Select course")] + [
            (c.id, c.title) for c in courses
        ]


class TestResultForm(_StudentCourseForm):
    __test__ = False

    score = forms.IntegerField(min_value=0)
    grade = forms.CharField(max_length=16)
    passed = forms.BooleanField(required=False, initial=True, label="Pass")
    feedback = forms.CharField(widget=forms.Textarea(attrs={"rows": 3}))

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        _require_all(self, FILL_ALL)


class DailyResultForm(_StudentCourseForm):
    date = forms.DateField(widget=forms.DateInput(attrs={"type": "date"}))
    result_type = forms.CharField(max_length=64, label="Result type")
    score = forms.IntegerField(min_value=0)
    remarks = forms.CharField(required=False, widget=forms.Textarea(attrs={"rows": 2}))

    def __init__(self, *args, **kwargs):
        kwargs.setdefault("initial", {}).setdefault("date", timezone.localdate())
        super().__init__(*args, **kwargs)
        _require_all(self, FILL_REQUIRED)
