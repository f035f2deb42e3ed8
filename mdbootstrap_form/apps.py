from django.apps import AppConfig


class MdbootstrapFormConfig(AppConfig):
    name = "mdbootstrap_form"
    verbose_name = "Material Design Bootstrap forms"
