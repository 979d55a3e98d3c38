from flask_wtf import FlaskForm
from wtforms import IntegerField, StringField
from wtforms.validators import Length, NumberRange, Optional


class MemberSearchForm(FlaskForm):
    """Query-string filters for the member search; every field is optional."""

    class Meta:
        csrf = False

    name = StringField("Name", validators=[Optional(), Length(max=255)])
    age = IntegerField("Age", validators=[Optional(), NumberRange(min=0)])


class PageForm(FlaskForm):
    class Meta:
        csrf = False

    offset = IntegerField("Offset", default=0, validators=[Optional(), NumberRange(min=0)])
    limit = IntegerField("Limit", default=10, validators=[Optional(), NumberRange(min=1, max=100)])
