from django import forms
from django.conf import settings

from backend.types import StudentProfile, UserRole
from content.images import read_image_upload


def batch_choices():
    return [("", "Select batch")] + [(b, b) for b in settings.STUDENT_BATCHES]


class StudentProfileForm(forms.Form):
    name = forms.CharField(max_length=200, label="Full name")
    age = forms.IntegerField(min_value=1)
    class_name = forms.CharField(max_length=100, label="Class")
    school = forms.CharField(max_length=200)
    batch = forms.ChoiceField(choices=())
    tuition_center = forms.CharField(max_length=200)
    parent_mobile_number = forms.CharField(max_length=32)
    date_of_birth = forms.DateField(widget=forms.DateInput(attrs={"type": "date"}))
    profile_photo = forms.FileField(required=False)
    student_mobile_number = forms.CharField(max_length=32, required=False)

    field_messages = {
        "name": "Please enter the full name",
        "age": "Please enter a valid age",
        "class_name": "Please enter the class",
        "school": "Please enter the school name",
        "batch": "Please select a batch",
        "tuition_center": "Please enter the tuition center",
        "parent_mobile_number": "Please enter parent mobile number",
        "date_of_birth": "Please enter the date of birth",
    }

    def __init__(self, *args, existing_photo: bytes = b"", **kwargs):
        super().__init__(*args, **kwargs)
        self.existing_photo = existing_photo
        self.fields["batch"].choices = batch_choices()
        for name, message in self.field_messages.items():
            field = self.fields[name]
            field.error_messages["required"] = message
            field.error_messages["invalid"] = message
        self.fields["age"].error_messages["min_value"] = self.field_messages["age"]
        self.fields["batch"].error_messages["invalid_choice"] = self.field_messages["batch"]

    def clean_profile_photo(self):
        upload = self.cleaned_data.get("profile_photo")
        if not upload:
            if not self.existing_photo:
                raise forms.ValidationError("Please provide a profile photo")
            return self.existing_photo
        return read_image_upload(upload, settings.PROFILE_PHOTO_MAX_BYTES)

    def to_profile(self) -> StudentProfile:
        data = self.cleaned_data
        return StudentProfile(
            name=data["name"],
            age=data["age"],
            class_name=data["class_name"],
            school=data["school"],
            batch=data["batch"],
            tuition_center=data["tuition_center"],
            parent_mobile_number=data["parent_mobile_number"],
            date_of_birth=data["date_of_birth"].isoformat(),
            profile_photo=data["profile_photo"],
            student_mobile_number=data.get("student_mobile_number") or None,
        )

    @staticmethod
    def initial_for(profile: StudentProfile) -> dict:
        return {
            "name": profile.name,
            "age": profile.age,
            "class_name": profile.class_name,
            "school": profile.school,
            "batch": profile.batch,
            "tuition_center": profile.tuition_center,
            "parent_mobile_number": profile.parent_mobile_number,
            "date_of_birth": profile.date_of_birth,
            "student_mobile_number": profile.student_mobile_number or "",
        }


class RoleAssignmentForm(forms.Form):
    principal = forms.CharField(max_length=128)
    role = forms.ChoiceField(
        choices=[
            (UserRole.ADMIN.value, "Admin"),
            (UserRole.USER.value, "Student"),
            (UserRole.GUEST.value, "Guest"),
        ]
    )
