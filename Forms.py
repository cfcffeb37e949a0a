from flask_wtf import FlaskForm
from wtforms import FloatField, IntegerField, StringField
from wtforms.validators import DataRequired, NumberRange, Optional, Length

from config import GameConfig


class JSONFloatField(FloatField):
    def process_formdata(self, valuelist):
        # JSON bodies can carry objects that float() rejects with TypeError
        try:
            super().process_formdata(valuelist)
        except TypeError:
            self.data = None
            raise ValueError(self.gettext("Not a valid float value."))


class JSONIntegerField(IntegerField):
    def process_formdata(self, valuelist):
        try:
            super().process_formdata(valuelist)
        except TypeError:
            self.data = None
            raise ValueError(self.gettext("Not a valid integer value."))


def as_text(value):
    return value if value is None else str(value)


class CreateGameForm(FlaskForm):

    balance = JSONFloatField("Starting Balance", default=GameConfig.INITIAL_BALANCE,
                             validators=[Optional(), NumberRange(min=0)])
    seed = JSONIntegerField("Shuffle Seed", validators=[Optional()])


class BetForm(FlaskForm):

    # Presence and range checks belong to the engine, a bet of 0 must reach it
    bet = JSONFloatField("Bet Amount")


class GuessForm(FlaskForm):

    # Numbers and booleans become text so the engine reports them as invalid guesses
    guess = StringField("Guess", filters=[as_text],
                        validators=[DataRequired(message="Guess is required"), Length(max=16)])


def form_errors(form):
    """Flatten WTForms errors into one message"""
    return "; ".join(
        f"{name}: {', '.join(messages)}" for name, messages in form.errors.items()
    )
