# accounts/forms.py
from django import forms


class LoginForm(forms.Form):
    email = forms.EmailField(
        label="Correo Electrónico",
        widget=forms.EmailInput(attrs={
            "placeholder": "tu@email.com",
            "class": "form-control"
        })
    )
    password = forms.CharField(
        label="Contraseña",
        widget=forms.PasswordInput(attrs={
            "placeholder": "••••••••",
            "class": "form-control"
        })
    )


class RegisterForm(forms.Form):
    name = forms.CharField(
        label="Nombre Completo",
        max_length=150,
        widget=forms.TextInput(attrs={"placeholder": "Juan Pérez", "class": "form-control"})
    )
    business_name = forms.CharField(
        label="Nombre del Negocio",
        max_length=150,
        required=False,
        widget=forms.TextInput(attrs={"placeholder": "Mi Restaurante", "class": "form-control"})
    )
    email = forms.EmailField(
        label="Correo Electrónico",
        widget=forms.EmailInput(attrs={"placeholder": "tu@email.com", "class": "form-control"})
    )
    password = forms.CharField(
        label="Contraseña",
        min_length=6,
        widget=forms.PasswordInput(attrs={"placeholder": "••••••••", "class": "form-control"})
    )

    def clean_name(self):
        name = self.cleaned_data["name"].strip()
        if not name:
            raise forms.ValidationError("Ingresa tu nombre")
        return name
