from django import forms
from django.conf import settings

from .images import read_image_upload


class AnnouncementForm(forms.Form):
    title = forms.CharField(max_length=200)
    message = forms.CharField(widget=forms.Textarea(attrs={"rows": 4}))
    date = forms.CharField(widget=forms.DateInput(attrs={"type": "date"}))

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for field in self.fields.values():
            field.error_messages["required"] = "Please fill in all fields"


class ContactDetailsForm(forms.Form):
    email = forms.EmailField(
        error_messages={
            "required": "Please fill in all fields",
            "invalid": "Please enter a valid email address",
        }
    )
    phone = forms.CharField(max_length=50, error_messages={"required": "Please fill in all fields"})
    address = forms.CharField(
        widget=forms.Textarea(attrs={"rows": 2}),
        error_messages={"required": "Please fill in all fields"},
    )


class LogoForm(forms.Form):
    logo = forms.FileField(error_messages={"required": "Please select a logo image"})

    def clean_logo(self):
        return read_image_upload(self.cleaned_data["logo"], settings.LOGO_MAX_BYTES)
