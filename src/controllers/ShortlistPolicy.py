from models.DB_schemas.candidate import CandidateAnalysis
from utils.constants import REJECTION_REASON_BANDS


class ShortlistPolicy:
    """
    The one rule deciding whether a scored candidate is shortlisted.

    A candidate passes when the model recommends them and the overall
    match score and every breakdown dimension reach the threshold.
    """

    def __init__(self, threshold: int = 70):
        self.threshold = threshold

    def is_shortlisted(self, analysis: CandidateAnalysis) -> bool:
        if analysis.recommended != "yes":
            return False
        scores = [analysis.match_score, *analysis.scoring_breakdown.dimensions()]
        return all(score >= self.threshold for score in scores)

    def rejection_reasons(self, analysis: CandidateAnalysis) -> list[str]:
        if self.is_shortlisted(analysis):
            return []

        if analysis.match_score < self.threshold:
            reasons = []
            for lower_bound, band_reasons in REJECTION_REASON_BANDS:
                if analysis.match_score >= lower_bound:
                    reasons = list(band_reasons)
            return reasons

        weak = [
            name.replace("_", " ")
            for name, score in analysis.scoring_breakdown.model_dump().items()
            if score < self.threshold
        ]
        if weak:
            return ["Below threshold on: " + ", ".join(weak)]
        return ["Not recommended by the screening model"]
